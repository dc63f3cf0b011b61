"""Exceptions raised by the job fit analysis entry point."""

from __future__ import annotations


class FitAnalysisError(Exception):
    """Base class for fatal analysis failures."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class JobDescriptionParseError(FitAnalysisError):
    """The job description could not be turned into structured requirements."""


class ScoringConfigError(FitAnalysisError):
    """Scoring rules failed to load or are structurally invalid."""
