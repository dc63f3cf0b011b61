"""Job-description parsing service."""

from __future__ import annotations

import logging

from jobfit.extractor.config import ExtractorConfig, get_extractor_config
from jobfit.extractor.llm import ExtractorLLM
from jobfit.extractor.models import StructuredJobDescription
from jobfit.extractor.prompts import JOB_PARSE_SYSTEM_PROMPT, build_job_parse_prompt

logger = logging.getLogger(__name__)


class JobDescriptionParser:
    """Turns raw job-posting text into a `StructuredJobDescription`.

    Attributes:
        config: Extractor configuration settings.
    """

    def __init__(
        self,
        config: ExtractorConfig | None = None,
        llm: ExtractorLLM | None = None,
    ) -> None:
        """Initialize the parser.

        Args:
            config: Extractor configuration. If not provided, uses default.
            llm: LLM client. If not provided, one is built from `config`.
        """
        self.config = config or get_extractor_config()
        self._llm = llm or ExtractorLLM(config=self.config)

    def parse(self, text: str) -> StructuredJobDescription:
        """Extract structured requirements from a job description.

        Args:
            text: The pasted job description.

        Returns:
            The extracted requirements.

        Raises:
            ValueError: If the text is blank or too long.
            ExtractorLLMError: If the LLM fails or returns malformed JSON.
        """
        if not text or not text.strip():
            raise ValueError("Job description text is empty")
        if len(text) > self.config.max_input_chars:
            raise ValueError(
                f"Job description is too long ({len(text)} characters, "
                f"limit {self.config.max_input_chars})"
            )

        logger.info(
            "Extracting requirements from job description (%d chars)", len(text)
        )
        job = self._llm.generate_structured(
            prompt=build_job_parse_prompt(text),
            output_model=StructuredJobDescription,
            system_prompt=JOB_PARSE_SYSTEM_PROMPT,
        )
        logger.debug(
            "Extracted %d required / %d nice-to-have skills",
            len(job.required_skills),
            len(job.nice_to_have_skills),
        )
        return job
