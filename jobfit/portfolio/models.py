"""Data models for portfolio content (profile, projects, skills)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _PortfolioModel(BaseModel):
    # The portfolio site stores its data with camelCase keys.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict):
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class Stat(_PortfolioModel):
    """Headline statistic shown on the profile (e.g. "8+" / "Years Experience")."""

    value: str = Field(..., description="Displayed value")
    label: str = Field(..., description="Displayed label")

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: object) -> object:
        """Allow numeric values in hand-written YAML."""
        if isinstance(v, (int, float)):
            return str(v)
        return v


class Profile(_PortfolioModel):
    """Candidate profile."""

    name: str = Field(..., description="Candidate full name")
    role: str = Field(default="", description="Headline role")
    short_bio: str = Field(default="", description="One-paragraph biography")
    long_bio: str = Field(default="", description="Extended biography")
    philosophy: str = Field(default="", description="Engineering philosophy")
    email: str = Field(default="", description="Contact email")
    github: str = Field(default="", description="GitHub profile URL")
    linkedin: str = Field(default="", description="LinkedIn profile URL")
    devto: str | None = Field(default=None, description="dev.to profile URL")
    blog: str | None = Field(default=None, description="Blog URL")
    location: str = Field(default="", description="Current location")
    avatar_url: str | None = Field(default=None, description="Avatar image URL")
    stats: list[Stat] = Field(default_factory=list, description="Headline statistics")


class Project(_PortfolioModel):
    """Portfolio project."""

    id: str = Field(..., description="Stable project identifier")
    title: str = Field(..., description="Project title")
    description: str = Field(default="", description="Project summary")
    problem_statement: str = Field(default="", description="Problem addressed")
    solution: str = Field(default="", description="Solution summary")
    technologies: list[str] = Field(
        default_factory=list, description="Technologies used in the project"
    )
    role: str = Field(default="", description="Candidate's role on the project")
    live_url: str | None = Field(default=None, description="Live deployment URL")
    source_url: str | None = Field(default=None, description="Source code URL")
    image_url: str | None = Field(default=None, description="Screenshot URL")
    type: Literal["commercial", "personal"] | None = Field(
        default=None, description="Commercial or personal project"
    )
    status: Literal["online", "offline", "archived", "in-development"] = Field(
        default="online", description="Deployment status"
    )


class SkillItem(_PortfolioModel):
    """Single skill entry; `hidden` only affects display."""

    name: str = Field(..., description="Skill name")
    hidden: bool = Field(default=False, description="Hide from the skills page")


class SkillCategory(_PortfolioModel):
    """Named group of skills (e.g. "Backend")."""

    name: str = Field(..., description="Category name")
    skills: list[SkillItem] = Field(default_factory=list, description="Skills")
    icon: str | None = Field(default=None, description="Display icon")

    @field_validator("skills", mode="before")
    @classmethod
    def coerce_skill_names(cls, v: object) -> object:
        """Accept bare skill names as shorthand for `{name: ...}`."""
        if isinstance(v, list):
            return [{"name": item} if isinstance(item, str) else item for item in v]
        return v


class PortfolioData(_PortfolioModel):
    """Everything the analyzer needs to know about the candidate."""

    profile: Profile
    projects: list[Project] = Field(default_factory=list)
    skills: list[SkillCategory] = Field(default_factory=list)
