"""Result models for the Job Fit Analyzer."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

SkillSource = Literal["profile", "projects", "missing"]


@dataclass(frozen=True)
class SkillMatch:
    """Outcome for one requested skill.

    `weight` is the signed point contribution of the skill: negative when a
    penalty applied, above the rule's max points when bonuses stacked.
    """

    skill: str
    found: bool
    source: SkillSource
    weight: float

    def __post_init__(self) -> None:
        if self.found == (self.source == "missing"):
            raise ValueError(
                f"SkillMatch source '{self.source}' is inconsistent with "
                f"found={self.found}"
            )


@dataclass(frozen=True)
class ProjectRelevance:
    """Project matched to a stated job responsibility."""

    project_name: str
    relevance_score: float
    reason: str


@dataclass(frozen=True)
class ExperienceMatch:
    required: float
    actual: int
    score: float


@dataclass(frozen=True)
class SkillEvaluation:
    total_score: float = 0.0
    max_possible: float = 0.0
    matches: tuple[SkillMatch, ...] = ()


@dataclass(frozen=True)
class ExperienceEvaluation:
    total_score: float
    max_possible: float


@dataclass(frozen=True)
class RelevanceEvaluation:
    total_score: float = 0.0
    max_possible: float = 0.0
    matches: tuple[ProjectRelevance, ...] = ()


@dataclass(frozen=True)
class FitAnalysisResult:
    """Final report for one job description."""

    score: int
    required_skills_coverage: int
    nice_to_have_skills_coverage: int
    required_matches: tuple[SkillMatch, ...] = ()
    nice_to_have_matches: tuple[SkillMatch, ...] = ()
    experience_match: ExperienceMatch = field(
        default_factory=lambda: ExperienceMatch(required=0, actual=0, score=0)
    )
    project_relevance: tuple[ProjectRelevance, ...] = ()
    strengths: tuple[str, ...] = ()
    gaps: tuple[str, ...] = ()
    conclusion: str = ""

    def __post_init__(self) -> None:
        for name in (
            "score",
            "required_skills_coverage",
            "nice_to_have_skills_coverage",
        ):
            value = getattr(self, name)
            if not (0 <= value <= 100):
                raise ValueError(f"{name} must be between 0 and 100 (got {value})")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dictionary."""
        return asdict(self)
