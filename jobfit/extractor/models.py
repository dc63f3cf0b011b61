"""Data models for job-description extraction."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class StructuredJobDescription(BaseModel):
    """Requirements extracted from a job posting.

    Produced once per analysis and never modified. The extraction prompt asks
    for camelCase keys (`requiredSkills`, ...); snake_case is accepted too.

    Attributes:
        required_skills: Must-have skills/technologies.
        nice_to_have_skills: Preferred skills/technologies.
        years_experience: Minimum years of experience asked for (0 if none).
        key_responsibilities: Main duties of the role.
        domains: Business or technical domains (e.g. "fintech").
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    required_skills: list[str] = Field(
        default_factory=list, description="Must-have skills/technologies"
    )
    nice_to_have_skills: list[str] = Field(
        default_factory=list, description="Nice-to-have skills/technologies"
    )
    years_experience: float = Field(
        default=0, ge=0, description="Minimum required years of experience"
    )
    key_responsibilities: list[str] = Field(
        default_factory=list, description="List of key responsibilities"
    )
    domains: list[str] = Field(default_factory=list, description="Business domains")

    @field_validator(
        "required_skills",
        "nice_to_have_skills",
        "key_responsibilities",
        "domains",
        mode="before",
    )
    @classmethod
    def coerce_list(cls, v: object) -> object:
        """Treat null as empty and drop blank entries."""
        if v is None:
            return []
        if isinstance(v, list):
            return [
                str(item).strip()
                for item in v
                if item is not None and str(item).strip()
            ]
        return v

    @field_validator("years_experience", mode="before")
    @classmethod
    def coerce_years(cls, v: object) -> object:
        """Treat null as no requirement."""
        return 0 if v is None else v

    def to_dict(self) -> dict:
        """Serialize to a dictionary (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_dict(cls, data: dict) -> StructuredJobDescription:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)
