"""Flatten portfolio data into a lookup-ready scoring context."""

from __future__ import annotations

import re
from dataclasses import dataclass

from jobfit.portfolio.models import PortfolioData, Profile
from jobfit.scoring.matchers import normalize_skill

# Used when neither the stats nor the bio mention years of experience.
DEFAULT_USER_YEARS = 5

_YEARS_LABEL_RE = re.compile(r"experience|years", re.IGNORECASE)
_FIRST_INT_RE = re.compile(r"\d+")
_BIO_YEARS_RE = re.compile(r"(\d+)\+?\s*years", re.IGNORECASE)


@dataclass(frozen=True)
class ProjectContext:
    """Searchable view of a project."""

    title: str
    description: str  # lower-cased
    tech: tuple[str, ...]  # normalized technology tokens


@dataclass(frozen=True)
class PortfolioContext:
    """Read-only portfolio view consumed by the evaluators.

    `known_skills` keeps first-seen order so matching is reproducible.
    """

    known_skills: tuple[str, ...]
    projects: tuple[ProjectContext, ...]
    user_years: int


def extract_user_years(profile: Profile) -> int:
    """Estimate years of experience from profile stats, then the short bio."""
    for stat in profile.stats:
        if _YEARS_LABEL_RE.search(stat.label or ""):
            match = _FIRST_INT_RE.search(stat.value or "")
            return int(match.group()) if match else 0

    match = _BIO_YEARS_RE.search(profile.short_bio or "")
    if match:
        return int(match.group(1))
    return DEFAULT_USER_YEARS


def build_portfolio_context(portfolio: PortfolioData) -> PortfolioContext:
    """Build the scoring context for one analysis.

    Project technologies are added to the known skills: a technology used in
    a project counts even if it is not listed on the skills page.
    """
    known: dict[str, None] = {}
    for category in portfolio.skills:
        for item in category.skills:
            token = normalize_skill(item.name)
            if token:
                known.setdefault(token)

    projects: list[ProjectContext] = []
    for project in portfolio.projects:
        tech = tuple(
            dict.fromkeys(
                token
                for token in (normalize_skill(t) for t in project.technologies)
                if token
            )
        )
        for token in tech:
            known.setdefault(token)
        projects.append(
            ProjectContext(
                title=project.title,
                description=project.description.lower(),
                tech=tech,
            )
        )

    return PortfolioContext(
        known_skills=tuple(known),
        projects=tuple(projects),
        user_years=extract_user_years(portfolio.profile),
    )
