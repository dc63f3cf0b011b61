"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def example_portfolio_path() -> Path:
    """Path to the example portfolio shipped with the repo."""
    return REPO_ROOT / "data" / "portfolio.example.yaml"


@pytest.fixture
def sample_portfolio_data() -> dict:
    """Small camelCase portfolio document, as the portfolio site stores it."""
    return {
        "profile": {
            "name": "Jane Doe",
            "role": "Backend Engineer",
            "shortBio": "Engineer with 6+ years building APIs.",
            "email": "jane@example.com",
            "location": "Remote",
            "stats": [
                {"value": "12", "label": "Projects Shipped"},
                {"value": "7+", "label": "Years Experience"},
            ],
        },
        "projects": [
            {
                "id": "billing",
                "title": "Billing Service",
                "description": "Subscription billing with Stripe webhooks.",
                "technologies": ["Python", "FastAPI", "PostgreSQL"],
                "type": "commercial",
            },
            {
                "id": "dash",
                "title": "Ops Dashboard",
                "description": "Internal metrics dashboard.",
                "technologies": ["TypeScript", "React", "python"],
            },
        ],
        "skills": [
            {"name": "Backend", "skills": ["Python", "Django", {"name": "Go"}]},
            {
                "name": "Infra",
                "skills": [{"name": "Terraform", "hidden": True}],
            },
        ],
    }


@pytest.fixture
def sample_portfolio(sample_portfolio_data):
    """Validated PortfolioData built from `sample_portfolio_data`."""
    from jobfit.portfolio.models import PortfolioData

    return PortfolioData.model_validate(sample_portfolio_data)
