"""Job fit analysis service."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol

from jobfit.config.settings import Settings, get_settings
from jobfit.extractor.llm import ExtractorLLMError
from jobfit.extractor.models import StructuredJobDescription
from jobfit.portfolio.models import PortfolioData
from jobfit.portfolio.service import PortfolioService
from jobfit.scoring.aggregate import (
    aggregate_score,
    calculate_coverage,
    extract_gaps,
    extract_strengths,
    select_conclusion,
)
from jobfit.scoring.config import ScoringConfig, load_scoring_config
from jobfit.scoring.context import PortfolioContext, build_portfolio_context
from jobfit.scoring.errors import JobDescriptionParseError, ScoringConfigError
from jobfit.scoring.evaluators import (
    evaluate_experience,
    evaluate_responsibilities,
    evaluate_skills,
)
from jobfit.scoring.models import ExperienceMatch, FitAnalysisResult

logger = logging.getLogger(__name__)


class JobDescriptionSource(Protocol):
    def parse(self, text: str) -> StructuredJobDescription: ...


class PortfolioSource(Protocol):
    def load(self) -> PortfolioData: ...


class JobFitAnalyzer:
    """Scores a job description against the candidate's portfolio.

    The scoring rules are loaded on first use and reused for the lifetime of
    the analyzer instance.
    """

    def __init__(
        self,
        parser: JobDescriptionSource | None = None,
        portfolio_service: PortfolioSource | None = None,
        config_loader: Callable[[], ScoringConfig] | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()

        self._parser = parser
        self._portfolio = portfolio_service or PortfolioService(settings=self.settings)
        self._config_loader = config_loader or self._load_configured_rules
        self._config: ScoringConfig | None = None

    @property
    def parser(self) -> JobDescriptionSource:
        """Job-description parser; the LLM-backed one unless injected."""
        if self._parser is None:
            from jobfit.extractor.service import JobDescriptionParser

            self._parser = JobDescriptionParser()
        return self._parser

    def _load_configured_rules(self) -> ScoringConfig:
        return load_scoring_config(self.settings.scoring_rules_path)

    def get_config(self) -> ScoringConfig:
        """Return the scoring rules, loading them on the first call.

        Raises:
            ScoringConfigError: If the rules cannot be loaded or are invalid.
        """
        if self._config is not None:
            return self._config

        try:
            config = self._config_loader()
        except ScoringConfigError:
            raise
        except (OSError, ValueError) as e:
            raise ScoringConfigError(f"Failed to load scoring rules: {e}", e) from e

        if not isinstance(config, ScoringConfig):
            raise ScoringConfigError(
                f"Scoring rules loader returned {type(config).__name__}, "
                "expected ScoringConfig"
            )

        logger.info(
            "Loaded scoring rules (%d overrides, %d tiers)",
            len(config.conclusions.overrides),
            len(config.conclusions.tiers),
        )
        self._config = config
        return config

    def score(
        self,
        job: StructuredJobDescription,
        context: PortfolioContext,
        config: ScoringConfig | None = None,
    ) -> FitAnalysisResult:
        """Run the deterministic scoring pipeline on already-loaded inputs."""
        rules = config or self.get_config()
        skill_rules = rules.skills

        required = evaluate_skills(
            job.required_skills,
            context,
            skill_rules.required,
            check_project_usage=True,
            expert_project_threshold=skill_rules.expert_project_threshold,
            thresholds=rules.similarity,
        )
        nice_to_have = evaluate_skills(
            job.nice_to_have_skills,
            context,
            skill_rules.nice_to_have,
            check_project_usage=False,
            thresholds=rules.similarity,
        )
        experience = evaluate_experience(
            job.years_experience, context.user_years, rules.experience
        )
        relevance = evaluate_responsibilities(
            job.key_responsibilities, context.projects, rules.responsibilities
        )
        logger.debug(
            "Partial scores: required=%.1f/%.1f nice=%.1f/%.1f "
            "experience=%.1f/%.1f relevance=%.1f",
            required.total_score,
            required.max_possible,
            nice_to_have.total_score,
            nice_to_have.max_possible,
            experience.total_score,
            experience.max_possible,
            relevance.total_score,
        )

        score = aggregate_score([required, nice_to_have, experience, relevance])
        req_coverage = calculate_coverage(required.matches)

        return FitAnalysisResult(
            score=score,
            required_skills_coverage=req_coverage,
            nice_to_have_skills_coverage=calculate_coverage(nice_to_have.matches),
            required_matches=required.matches,
            nice_to_have_matches=nice_to_have.matches,
            experience_match=ExperienceMatch(
                required=job.years_experience,
                actual=context.user_years,
                score=experience.total_score,
            ),
            project_relevance=relevance.matches,
            strengths=tuple(extract_strengths(required.matches, rules.expert_weight)),
            gaps=tuple(extract_gaps(required.matches)),
            conclusion=select_conclusion(score, req_coverage, rules.conclusions),
        )

    async def analyze(self, job_description_text: str) -> FitAnalysisResult:
        """Parse a job description, load the portfolio, and score the fit.

        The parse and the portfolio load run concurrently; if either fails the
        whole analysis fails.

        Raises:
            ScoringConfigError: If the scoring rules cannot be loaded.
            JobDescriptionParseError: If the job description cannot be parsed.
        """
        config = self.get_config()

        job, portfolio = await asyncio.gather(
            self._parse_job(job_description_text),
            asyncio.to_thread(self._portfolio.load),
        )
        context = build_portfolio_context(portfolio)

        result = self.score(job, context, config)
        logger.info(
            "Job fit score=%d required_coverage=%d%% nice_to_have_coverage=%d%%",
            result.score,
            result.required_skills_coverage,
            result.nice_to_have_skills_coverage,
        )
        return result

    async def _parse_job(self, text: str) -> StructuredJobDescription:
        try:
            return await asyncio.to_thread(self.parser.parse, text)
        except (ExtractorLLMError, ValueError) as e:
            raise JobDescriptionParseError(
                f"Failed to parse job description: {e}", e
            ) from e

    def format_result(self, result: FitAnalysisResult) -> str:
        """Format a FitAnalysisResult for CLI output."""
        lines: list[str] = []
        lines.append(f"Match score: {result.score}%")
        lines.append(
            "Coverage: "
            f"required={result.required_skills_coverage}% "
            f"nice_to_have={result.nice_to_have_skills_coverage}%"
        )

        experience = result.experience_match
        lines.append(
            "Experience: "
            f"required={experience.required:g}y actual={experience.actual}y "
            f"points={experience.score:g}"
        )

        for label, matches in (
            ("Required", result.required_matches),
            ("Nice-to-have", result.nice_to_have_matches),
        ):
            if not matches:
                continue
            lines.append(f"{label} skills:")
            for match in matches:
                mark = "+" if match.found else "-"
                lines.append(
                    f"  {mark} {match.skill} ({match.source}, {match.weight:+g})"
                )

        if result.project_relevance:
            lines.append("Relevant projects:")
            for relevance in result.project_relevance:
                lines.append(f"  * {relevance.project_name}: {relevance.reason}")

        if result.strengths:
            lines.append(f"Strengths: {', '.join(result.strengths)}")
        if result.gaps:
            lines.append(f"Gaps: {', '.join(result.gaps)}")

        lines.append(f"Conclusion: {result.conclusion}")
        return "\n".join(lines)
