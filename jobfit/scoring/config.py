"""Scoring rules for the Job Fit Analyzer.

The rule set is plain data: per-skill-class point rules, the experience and
responsibility rules, similarity thresholds, and the conclusion table. The
defaults reproduce the portfolio's built-in rules; a YAML/JSON file can
override any part of them, with keys in snake_case or camelCase.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from jobfit.scoring.errors import ScoringConfigError
from jobfit.utils.files import load_mapping

NonNegative = Annotated[float, Field(ge=0.0)]


class _Rule(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SkillRule(_Rule):
    """Point rule for one class of skills (required or nice-to-have)."""

    match_base: NonNegative = Field(
        ..., description="Points for a strong profile match"
    )
    missing_penalty: NonNegative = Field(
        default=0.0, description="Points deducted when the skill is not found"
    )
    max_points: NonNegative = Field(
        ..., description="Denominator contribution per skill, regardless of outcome"
    )
    in_projects_bonus: NonNegative | None = Field(
        default=None, description="Extra points when the skill is used in a project"
    )
    expert_bonus: NonNegative | None = Field(
        default=None,
        description="Extra points when the skill is used across many projects",
    )


class SkillRules(_Rule):
    required: SkillRule = Field(
        default_factory=lambda: SkillRule(
            match_base=10,
            in_projects_bonus=5,
            expert_bonus=5,
            missing_penalty=5,
            max_points=10,
        )
    )
    nice_to_have: SkillRule = Field(
        default_factory=lambda: SkillRule(match_base=5, missing_penalty=0, max_points=5)
    )
    expert_project_threshold: Annotated[int, Field(ge=1)] = Field(
        default=3,
        description="Minimum number of projects using a skill for the expert bonus",
    )


class ExperienceRule(_Rule):
    max_score: NonNegative = 15.0
    point_per_year: NonNegative = 1.0
    penalty_per_missing_year: NonNegative = 2.0


class ResponsibilityRule(_Rule):
    keyword_match_score: NonNegative = Field(
        default=5.0,
        description="Bonus per responsibility matched by a project (numerator only)",
    )


class SimilarityThresholds(_Rule):
    strong: Annotated[float, Field(ge=0.0, le=1.0)] = 0.8
    moderate: Annotated[float, Field(ge=0.0, le=1.0)] = 0.6

    @model_validator(mode="after")
    def validate_order(self) -> SimilarityThresholds:
        if self.moderate > self.strong:
            raise ValueError(
                "Similarity thresholds must satisfy moderate <= strong "
                f"(moderate={self.moderate}, strong={self.strong})."
            )
        return self


class ConclusionOverride(_Rule):
    """Rule checked before the score tiers: `metric >= threshold`."""

    metric: Literal["req_coverage", "score"]
    threshold: float
    message: str

    @field_validator("metric", mode="before")
    @classmethod
    def normalize_metric(cls, v: object) -> object:
        """Accept the camelCase spelling used by the portfolio front end."""
        if v == "reqCoverage":
            return "req_coverage"
        return v


class ConclusionTier(_Rule):
    """Score tier: applies when the final score is `>= threshold`."""

    threshold: float
    message: str


def _default_overrides() -> list[ConclusionOverride]:
    return [
        ConclusionOverride(
            metric="score",
            threshold=95,
            message=(
                "Exceptional fit. The candidate's profile strongly aligns "
                "with the core requirements."
            ),
        ),
        ConclusionOverride(
            metric="req_coverage",
            threshold=85,
            message=(
                "High Potential Match. Candidate possesses the majority of required "
                "technical skills, significantly offsetting other gaps."
            ),
        ),
        ConclusionOverride(
            metric="score",
            threshold=85,
            message="Strong technical fit with identifiable and learnable gaps.",
        ),
        ConclusionOverride(
            metric="req_coverage",
            threshold=70,
            message=(
                "Qualified Match. Good alignment with core technical stack. Gaps may "
                "be seniority-related or domain-specific."
            ),
        ),
    ]


def _default_tiers() -> list[ConclusionTier]:
    return [
        ConclusionTier(
            threshold=65,
            message=(
                "Moderate fit. Some foundational skills are present, but specific "
                "gaps exist."
            ),
        ),
        ConclusionTier(
            threshold=40,
            message=(
                "Partial Match. Candidate shares significant stack overlap but may "
                "require upskilling in key areas."
            ),
        ),
    ]


class ConclusionRules(_Rule):
    """Ordered conclusion table; the first matching entry wins."""

    overrides: list[ConclusionOverride] = Field(default_factory=_default_overrides)
    tiers: list[ConclusionTier] = Field(default_factory=_default_tiers)
    default_message: str = "Low match probability based on current portfolio data."


class ScoringConfig(_Rule):
    """Complete, validated scoring rule set."""

    skills: SkillRules = Field(default_factory=SkillRules)
    experience: ExperienceRule = Field(default_factory=ExperienceRule)
    responsibilities: ResponsibilityRule = Field(default_factory=ResponsibilityRule)
    similarity: SimilarityThresholds = Field(
        default_factory=SimilarityThresholds, alias="similarityThresholds"
    )
    conclusions: ConclusionRules = Field(default_factory=ConclusionRules)

    @property
    def expert_weight(self) -> float:
        """Weight at which a found required skill is labelled "(Expert)".

        A full strong match plus the in-project bonus.
        """
        required = self.skills.required
        return required.match_base + (required.in_projects_bonus or 0.0)


def load_scoring_config(path: Path | str | None = None) -> ScoringConfig:
    """Load scoring rules from a YAML/JSON file, or the defaults if `path` is None.

    Raises:
        ScoringConfigError: If the file cannot be read, parsed, or validated.
    """
    if path is None:
        return ScoringConfig()

    try:
        data = load_mapping(path)
    except (OSError, ValueError) as e:
        raise ScoringConfigError(f"Failed to load scoring rules: {e}", e) from e

    try:
        return ScoringConfig.model_validate(data)
    except ValidationError as e:
        raise ScoringConfigError(f"Invalid scoring rules in {path}: {e}", e) from e
