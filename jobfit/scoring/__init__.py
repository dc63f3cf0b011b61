"""Job fit scoring.

This module evaluates how well a candidate's portfolio matches a structured
job description and explains the result.

Public API:
    - JobFitAnalyzer: Main analysis service (`analyze` entry point)
    - FitAnalysisResult: Final report model
    - ScoringConfig: Scoring rule set
    - load_scoring_config: Load rules from YAML/JSON
    - FitAnalysisError, JobDescriptionParseError, ScoringConfigError
"""

from jobfit.scoring.config import ScoringConfig, load_scoring_config
from jobfit.scoring.context import PortfolioContext, build_portfolio_context
from jobfit.scoring.errors import (
    FitAnalysisError,
    JobDescriptionParseError,
    ScoringConfigError,
)
from jobfit.scoring.matchers import MatchResult, find_best_match, jaro_winkler
from jobfit.scoring.models import (
    ExperienceMatch,
    FitAnalysisResult,
    ProjectRelevance,
    SkillMatch,
)
from jobfit.scoring.service import JobFitAnalyzer

__all__ = [
    "JobFitAnalyzer",
    "FitAnalysisResult",
    "SkillMatch",
    "ProjectRelevance",
    "ExperienceMatch",
    "PortfolioContext",
    "build_portfolio_context",
    "MatchResult",
    "find_best_match",
    "jaro_winkler",
    "ScoringConfig",
    "load_scoring_config",
    "FitAnalysisError",
    "JobDescriptionParseError",
    "ScoringConfigError",
]
