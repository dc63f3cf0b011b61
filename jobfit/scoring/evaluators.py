"""Partial scores: skills, experience, and responsibility relevance.

Each evaluator is a pure function returning a numerator (`total_score`) and a
denominator contribution (`max_possible`) for the aggregator.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from jobfit.scoring.config import (
    ExperienceRule,
    ResponsibilityRule,
    SimilarityThresholds,
    SkillRule,
)
from jobfit.scoring.context import PortfolioContext, ProjectContext
from jobfit.scoring.matchers import find_best_match
from jobfit.scoring.models import (
    ExperienceEvaluation,
    ProjectRelevance,
    RelevanceEvaluation,
    SkillEvaluation,
    SkillMatch,
    SkillSource,
)

QUALITY_MULTIPLIERS = {"strong": 1.0, "moderate": 0.7}

STOP_WORDS = frozenset(
    {
        "manage",
        "develop",
        "create",
        "ensure",
        "system",
        "software",
        "working",
        "using",
        "application",
        "provide",
        "with",
        "the",
        "and",
        "for",
        "experience",
        "knowledge",
    }
)
MIN_KEYWORD_LENGTH = 4
REASON_KEYWORD_LIMIT = 3

# ASCII word characters only; accented letters are stripped like punctuation
_NON_WORD_RE = re.compile(r"[^A-Za-z0-9_\s]")


def evaluate_skills(
    targets: Sequence[str],
    context: PortfolioContext,
    rule: SkillRule,
    *,
    check_project_usage: bool = False,
    expert_project_threshold: int = 3,
    thresholds: SimilarityThresholds | None = None,
) -> SkillEvaluation:
    """Score requested skills against the portfolio.

    Every skill adds `rule.max_points` to the denominator whatever the
    outcome; bonuses can push a skill's own points above that.
    """
    total_score = 0.0
    max_possible = 0.0
    matches: list[SkillMatch] = []

    for skill in targets:
        result = find_best_match(skill, context.known_skills, thresholds)
        source: SkillSource = "missing"
        points = 0.0

        if result.found:
            points += rule.match_base * QUALITY_MULTIPLIERS[result.match_quality]
            source = "profile"
        else:
            points -= rule.missing_penalty

        if check_project_usage and rule.in_projects_bonus is not None:
            project_count = count_projects_using(skill, context.projects, thresholds)
            if project_count > 0:
                points += rule.in_projects_bonus
                if result.found:
                    source = "projects"
            if (
                project_count >= expert_project_threshold
                and rule.expert_bonus is not None
            ):
                points += rule.expert_bonus

        total_score += points
        max_possible += rule.max_points
        matches.append(
            SkillMatch(skill=skill, found=result.found, source=source, weight=points)
        )

    return SkillEvaluation(
        total_score=total_score, max_possible=max_possible, matches=tuple(matches)
    )


def count_projects_using(
    skill: str,
    projects: Sequence[ProjectContext],
    thresholds: SimilarityThresholds | None = None,
) -> int:
    """Count projects whose technology tokens match `skill`."""
    return sum(
        1
        for project in projects
        if find_best_match(skill, project.tech, thresholds).found
    )


def evaluate_experience(
    required_years: float, actual_years: float, rule: ExperienceRule
) -> ExperienceEvaluation:
    """Linear reward up to the cap, minus a penalty per missing year.

    Exceeding the requirement earns nothing beyond the cap.
    """
    score = min(actual_years * rule.point_per_year, rule.max_score)
    if actual_years < required_years:
        score -= (required_years - actual_years) * rule.penalty_per_missing_year
    return ExperienceEvaluation(total_score=score, max_possible=rule.max_score)


def extract_keywords(responsibility: str) -> list[str]:
    """Return the significant words of a responsibility, in order."""
    cleaned = _NON_WORD_RE.sub("", responsibility.lower())
    return [
        word
        for word in cleaned.split()
        if len(word) >= MIN_KEYWORD_LENGTH and word not in STOP_WORDS
    ]


def evaluate_responsibilities(
    responsibilities: Sequence[str],
    projects: Sequence[ProjectContext],
    rule: ResponsibilityRule,
) -> RelevanceEvaluation:
    """Award a bonus per responsibility that some project speaks to.

    Only the first matching project counts. This layer never adds to the
    denominator.
    """
    total_score = 0.0
    matches: list[ProjectRelevance] = []

    for responsibility in responsibilities:
        keywords = extract_keywords(responsibility)
        if not keywords:
            continue

        for project in projects:
            title = project.title.lower()
            if any(k in project.description or k in title for k in keywords):
                total_score += rule.keyword_match_score
                matches.append(
                    ProjectRelevance(
                        project_name=project.title,
                        relevance_score=rule.keyword_match_score,
                        reason="Matches keywords: "
                        + ", ".join(keywords[:REASON_KEYWORD_LIMIT]),
                    )
                )
                break

    return RelevanceEvaluation(
        total_score=total_score, max_possible=0.0, matches=tuple(matches)
    )
