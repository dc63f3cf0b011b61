"""Unit tests for the JobFitAnalyzer."""

from __future__ import annotations

import pytest


class _FakeParser:
    def __init__(self, job=None, error: Exception | None = None):
        self.job = job
        self.error = error
        self.calls: list[str] = []

    def parse(self, text: str):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.job


class _FakePortfolioService:
    def __init__(self, portfolio=None, error: Exception | None = None):
        self.portfolio = portfolio
        self.error = error
        self.calls = 0

    def load(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.portfolio


def _job(**overrides):
    from jobfit.extractor.models import StructuredJobDescription

    data = {
        "requiredSkills": ["Python", "PostgreSQL", "Kotlin"],
        "niceToHaveSkills": ["Terraform"],
        "yearsExperience": 5,
        "keyResponsibilities": ["Integrate Stripe payments"],
        "domains": ["fintech"],
    }
    data.update(overrides)
    return StructuredJobDescription.model_validate(data)


def _analyzer(parser, portfolio_service, **kwargs):
    from jobfit.config.settings import Settings
    from jobfit.scoring.service import JobFitAnalyzer

    return JobFitAnalyzer(
        parser=parser,
        portfolio_service=portfolio_service,
        settings=Settings(_env_file=None),  # type: ignore[call-arg]
        **kwargs,
    )


class TestAnalyze:
    """Test the async analyze entry point."""

    @pytest.mark.asyncio
    async def test_analyze_scores_sample_portfolio(self, sample_portfolio):
        parser = _FakeParser(job=_job())
        analyzer = _analyzer(parser, _FakePortfolioService(sample_portfolio))

        result = await analyzer.analyze("Senior Python engineer ...")

        assert parser.calls == ["Senior Python engineer ..."]

        # required 15 + 15 - 5, nice 5, experience 7, relevance 5 => 42 / 50
        assert result.score == 84
        assert result.required_skills_coverage == 67
        assert result.nice_to_have_skills_coverage == 100

        assert [(m.skill, m.source, m.weight) for m in result.required_matches] == [
            ("Python", "projects", 15),
            ("PostgreSQL", "projects", 15),
            ("Kotlin", "missing", -5),
        ]
        assert result.nice_to_have_matches[0].source == "profile"
        assert result.experience_match.required == 5
        assert result.experience_match.actual == 7
        assert result.experience_match.score == 7

        assert len(result.project_relevance) == 1
        assert result.project_relevance[0].project_name == "Billing Service"
        assert (
            result.project_relevance[0].reason
            == "Matches keywords: integrate, stripe, payments"
        )

        assert result.strengths == ("Python (Expert)", "PostgreSQL (Expert)")
        assert result.gaps == ("Kotlin",)
        assert result.conclusion.startswith("Moderate fit.")

    @pytest.mark.asyncio
    async def test_analyze_is_deterministic(self, sample_portfolio):
        analyzer = _analyzer(
            _FakeParser(job=_job()), _FakePortfolioService(sample_portfolio)
        )

        first = await analyzer.analyze("posting")
        second = await analyzer.analyze("posting")

        assert first == second

    @pytest.mark.asyncio
    async def test_scoring_rules_are_loaded_once(self, sample_portfolio):
        from jobfit.scoring.config import ScoringConfig

        calls = []

        def loader():
            calls.append(1)
            return ScoringConfig()

        portfolio_service = _FakePortfolioService(sample_portfolio)
        analyzer = _analyzer(
            _FakeParser(job=_job()), portfolio_service, config_loader=loader
        )

        await analyzer.analyze("one")
        await analyzer.analyze("two")

        assert len(calls) == 1
        assert portfolio_service.calls == 2

    @pytest.mark.asyncio
    async def test_custom_rules_change_the_result(self, sample_portfolio):
        from jobfit.scoring.config import ConclusionRules, ScoringConfig

        config = ScoringConfig(
            conclusions=ConclusionRules(overrides=[], tiers=[], default_message="Nope.")
        )
        analyzer = _analyzer(
            _FakeParser(job=_job()),
            _FakePortfolioService(sample_portfolio),
            config_loader=lambda: config,
        )

        result = await analyzer.analyze("posting")

        assert result.conclusion == "Nope."

    @pytest.mark.asyncio
    async def test_empty_job_scores_experience_only(self, sample_portfolio):
        from jobfit.extractor.models import StructuredJobDescription

        analyzer = _analyzer(
            _FakeParser(job=StructuredJobDescription()),
            _FakePortfolioService(sample_portfolio),
        )

        result = await analyzer.analyze("posting")

        # Only experience contributes: 7 / 15
        assert result.score == 47
        assert result.required_skills_coverage == 0
        assert result.nice_to_have_skills_coverage == 0
        assert result.strengths == ()
        assert result.gaps == ()
        assert result.conclusion.startswith("Partial Match.")


class TestAnalyzeErrors:
    """Test failure modes of analyze."""

    @pytest.mark.asyncio
    async def test_llm_failure_becomes_parse_error(self, sample_portfolio):
        from jobfit.extractor.llm import ExtractorLLMError
        from jobfit.scoring.errors import JobDescriptionParseError

        cause = ExtractorLLMError("bad json")
        analyzer = _analyzer(
            _FakeParser(error=cause), _FakePortfolioService(sample_portfolio)
        )

        with pytest.raises(JobDescriptionParseError) as exc:
            await analyzer.analyze("posting")

        assert str(exc.value) == "Failed to parse job description: bad json"
        assert exc.value.original_error is cause

    @pytest.mark.asyncio
    async def test_malformed_llm_response_becomes_parse_error(
        self, monkeypatch, sample_portfolio
    ):
        from jobfit.extractor.config import ExtractorConfig
        from jobfit.extractor.llm import ExtractorLLM, ExtractorLLMError
        from jobfit.extractor.service import JobDescriptionParser
        from jobfit.scoring.errors import JobDescriptionParseError

        class _NoChoices:
            choices: list[object] = []

        config = ExtractorConfig(_env_file=None, llm_max_retries=0)  # type: ignore[call-arg]
        llm = ExtractorLLM(config=config)
        monkeypatch.setattr(llm, "_call_completion", lambda **_kwargs: _NoChoices())
        analyzer = _analyzer(
            JobDescriptionParser(config=config, llm=llm),
            _FakePortfolioService(sample_portfolio),
        )

        with pytest.raises(JobDescriptionParseError) as exc:
            await analyzer.analyze("Python developer")

        assert str(exc.value).startswith("Failed to parse job description:")
        assert isinstance(exc.value.original_error, ExtractorLLMError)

    @pytest.mark.asyncio
    async def test_invalid_input_becomes_parse_error(self, sample_portfolio):
        from jobfit.scoring.errors import JobDescriptionParseError

        analyzer = _analyzer(
            _FakeParser(error=ValueError("Job description text is empty")),
            _FakePortfolioService(sample_portfolio),
        )

        with pytest.raises(JobDescriptionParseError, match="text is empty"):
            await analyzer.analyze("")

    @pytest.mark.asyncio
    async def test_portfolio_failure_propagates(self):
        analyzer = _analyzer(
            _FakeParser(job=_job()),
            _FakePortfolioService(error=FileNotFoundError("portfolio.yaml")),
        )

        with pytest.raises(FileNotFoundError):
            await analyzer.analyze("posting")

    @pytest.mark.asyncio
    async def test_config_failure_stops_before_parsing(self, sample_portfolio):
        from jobfit.scoring.errors import ScoringConfigError

        def loader():
            raise OSError("permission denied")

        parser = _FakeParser(job=_job())
        analyzer = _analyzer(
            parser, _FakePortfolioService(sample_portfolio), config_loader=loader
        )

        with pytest.raises(ScoringConfigError, match="permission denied"):
            await analyzer.analyze("posting")

        assert parser.calls == []

    def test_config_error_passes_through(self):
        from jobfit.scoring.errors import ScoringConfigError

        original = ScoringConfigError("broken rules")

        def loader():
            raise original

        analyzer = _analyzer(None, _FakePortfolioService(), config_loader=loader)

        with pytest.raises(ScoringConfigError) as exc:
            analyzer.get_config()

        assert exc.value is original

    def test_loader_returning_wrong_type_is_rejected(self):
        from jobfit.scoring.errors import ScoringConfigError

        analyzer = _analyzer(
            None, _FakePortfolioService(), config_loader=lambda: {"skills": {}}
        )

        with pytest.raises(ScoringConfigError, match="expected ScoringConfig"):
            analyzer.get_config()

    def test_failed_load_is_retried_next_time(self):
        from jobfit.scoring.config import ScoringConfig
        from jobfit.scoring.errors import ScoringConfigError

        results = [ValueError("bad"), ScoringConfig()]

        def loader():
            item = results.pop(0)
            if isinstance(item, Exception):
                raise item
            return item

        analyzer = _analyzer(None, _FakePortfolioService(), config_loader=loader)

        with pytest.raises(ScoringConfigError):
            analyzer.get_config()
        assert analyzer.get_config() == ScoringConfig()


class TestConfiguredRules:
    def test_rules_path_from_settings(self, tmp_path):
        from jobfit.config.settings import Settings
        from jobfit.scoring.service import JobFitAnalyzer

        rules = tmp_path / "rules.yaml"
        rules.write_text("experience:\n  max_score: 30\n", encoding="utf-8")
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            scoring_rules_path=rules,
        )

        analyzer = JobFitAnalyzer(
            parser=_FakeParser(),
            portfolio_service=_FakePortfolioService(),
            settings=settings,
        )

        assert analyzer.get_config().experience.max_score == 30

    def test_default_parser_is_created_lazily(self, monkeypatch):
        from jobfit.extractor.config import reset_extractor_config
        from jobfit.extractor.service import JobDescriptionParser

        monkeypatch.delenv("EXTRACTOR_LLM_MODEL", raising=False)
        reset_extractor_config()
        analyzer = _analyzer(None, _FakePortfolioService())

        assert analyzer._parser is None
        assert isinstance(analyzer.parser, JobDescriptionParser)
        assert analyzer.parser is analyzer.parser
        reset_extractor_config()


class TestScoreAndFormat:
    def test_score_with_explicit_config(self, sample_portfolio):
        from jobfit.scoring.config import ScoringConfig, SkillRule, SkillRules
        from jobfit.scoring.context import build_portfolio_context

        config = ScoringConfig(
            skills=SkillRules(
                required=SkillRule(match_base=10, missing_penalty=0, max_points=10)
            )
        )
        analyzer = _analyzer(None, _FakePortfolioService())

        result = analyzer.score(
            _job(
                niceToHaveSkills=[],
                keyResponsibilities=[],
                yearsExperience=0,
            ),
            build_portfolio_context(sample_portfolio),
            config,
        )

        # required 10 + 10 + 0 out of 30, experience 7 out of 15
        assert result.score == 60
        assert result.strengths == ("Python (Expert)", "PostgreSQL (Expert)")

    def test_format_result(self, sample_portfolio):
        from jobfit.scoring.context import build_portfolio_context

        analyzer = _analyzer(None, _FakePortfolioService())
        result = analyzer.score(_job(), build_portfolio_context(sample_portfolio))

        report = analyzer.format_result(result)

        assert report.splitlines()[0] == "Match score: 84%"
        assert "Coverage: required=67% nice_to_have=100%" in report
        assert "Experience: required=5y actual=7y points=7" in report
        assert "  + Python (projects, +15)" in report
        assert "  - Kotlin (missing, -5)" in report
        relevance = "  * Billing Service: Matches keywords: integrate, stripe, payments"
        assert relevance in report
        assert "Strengths: Python (Expert), PostgreSQL (Expert)" in report
        assert "Gaps: Kotlin" in report
        assert report.splitlines()[-1].startswith("Conclusion: Moderate fit.")
