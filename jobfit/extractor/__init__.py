"""Job description extraction.

This module turns pasted job-posting text into structured requirements using
an LLM through LiteLLM.

Public API:
    - JobDescriptionParser: Main service class for job-description parsing
    - StructuredJobDescription: Pydantic model for extracted requirements
    - ExtractorConfig: Configuration settings for the extractor
    - get_extractor_config: Get the extractor configuration singleton
"""

from jobfit.extractor.config import (
    ExtractorConfig,
    get_extractor_config,
    reset_extractor_config,
)
from jobfit.extractor.llm import ExtractorLLM, ExtractorLLMError
from jobfit.extractor.models import StructuredJobDescription
from jobfit.extractor.service import JobDescriptionParser

__all__ = [
    "JobDescriptionParser",
    "StructuredJobDescription",
    "ExtractorConfig",
    "ExtractorLLM",
    "ExtractorLLMError",
    "get_extractor_config",
    "reset_extractor_config",
]
