"""Portfolio content: profile, projects, and skill categories.

Public API:
    - PortfolioService: Load and validate portfolio data files
    - PortfolioData: Root portfolio model
"""

from jobfit.portfolio.models import (
    PortfolioData,
    Profile,
    Project,
    SkillCategory,
    SkillItem,
    Stat,
)
from jobfit.portfolio.service import PortfolioService

__all__ = [
    "PortfolioService",
    "PortfolioData",
    "Profile",
    "Project",
    "SkillCategory",
    "SkillItem",
    "Stat",
]
