"""Portfolio loading and validation utilities."""

from __future__ import annotations

import logging
from pathlib import Path

from jobfit.config.settings import Settings, get_settings
from jobfit.portfolio.models import PortfolioData
from jobfit.utils.files import load_mapping

logger = logging.getLogger(__name__)


class PortfolioService:
    """Service for loading and validating portfolio data files."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def load(self, path: Path | str | None = None) -> PortfolioData:
        """Load and validate portfolio data from YAML or JSON.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not a valid YAML/JSON mapping.
            pydantic.ValidationError: If the content does not fit the schema.
        """
        portfolio_path = (
            Path(path) if path is not None else self.settings.portfolio_path
        )
        data = load_mapping(portfolio_path)
        portfolio = PortfolioData.model_validate(data)
        logger.debug(
            "Loaded portfolio from %s (%d projects, %d skill categories)",
            portfolio_path,
            len(portfolio.projects),
            len(portfolio.skills),
        )
        return portfolio

    def validate(self, portfolio: PortfolioData) -> list[str]:
        """Return warnings for portfolios that will score poorly."""
        warnings: list[str] = []

        if not portfolio.projects:
            warnings.append("No projects listed")
        if not any(category.skills for category in portfolio.skills):
            warnings.append("Skills list is empty")
        if not any(
            "experience" in stat.label.lower() or "years" in stat.label.lower()
            for stat in portfolio.profile.stats
        ):
            warnings.append("No experience statistic; years will be read from the bio")

        return warnings
