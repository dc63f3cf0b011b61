"""Main entry point for the Job Fit Analyzer."""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from jobfit import __version__
from jobfit.config.settings import Settings
from jobfit.utils.logging import configure_logging


def _read_job_text(parsed: argparse.Namespace) -> str:
    if parsed.text is not None:
        return parsed.text
    if parsed.file == "-":
        return sys.stdin.read()
    return Path(parsed.file).read_text(encoding="utf-8")


def _write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="jobfit",
        description="Job Fit Analyzer: score a job description against a portfolio",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m jobfit analyze --file posting.txt
  pbpaste | python -m jobfit analyze --file - --json
  python -m jobfit score --jd jd.json --portfolio data/portfolio.example.yaml
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="modes",
        description="Available commands",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--portfolio",
        type=Path,
        default=None,
        help="Portfolio data file (defaults to settings)",
    )
    common.add_argument(
        "--rules",
        type=Path,
        default=None,
        help="Scoring rules file (defaults to settings / built-in rules)",
    )
    common.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of a text report",
    )
    common.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Also write the result JSON to this path",
    )

    analyze_parser = subparsers.add_parser(
        "analyze",
        parents=[common],
        help="Extract requirements with the LLM and score the fit",
    )
    source = analyze_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--text", help="Job description text")
    source.add_argument(
        "--file",
        help="File containing the job description ('-' reads stdin)",
    )

    score_parser = subparsers.add_parser(
        "score",
        parents=[common],
        help="Score an already-extracted job description (no LLM call)",
    )
    score_parser.add_argument(
        "--jd",
        type=Path,
        required=True,
        help="Structured job description JSON file",
    )

    return parser


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    try:
        settings = Settings()
    except ValidationError as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    logger = configure_logging(level=parsed.log_level or settings.log_level)

    if parsed.mode is None:
        parser.print_help()
        return 0

    overrides: dict[str, object] = {}
    if parsed.portfolio is not None:
        overrides["portfolio_path"] = parsed.portfolio
    if parsed.rules is not None:
        overrides["scoring_rules_path"] = parsed.rules
    if overrides:
        settings = settings.model_copy(update=overrides)

    from jobfit.extractor.models import StructuredJobDescription
    from jobfit.portfolio.service import PortfolioService
    from jobfit.scoring.context import build_portfolio_context
    from jobfit.scoring.errors import FitAnalysisError
    from jobfit.scoring.service import JobFitAnalyzer

    portfolio_service = PortfolioService(settings=settings)

    try:
        if parsed.mode == "analyze":
            analyzer = JobFitAnalyzer(
                portfolio_service=portfolio_service, settings=settings
            )
            result = asyncio.run(analyzer.analyze(_read_job_text(parsed)))
        else:
            job = StructuredJobDescription.from_dict(
                json.loads(parsed.jd.read_text(encoding="utf-8"))
            )
            analyzer = JobFitAnalyzer(
                portfolio_service=portfolio_service, settings=settings
            )
            portfolio = portfolio_service.load()
            for warning in portfolio_service.validate(portfolio):
                logger.warning(f"Portfolio: {warning}")
            result = analyzer.score(job, build_portfolio_context(portfolio))
    except FitAnalysisError as e:
        logger.error(str(e))
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load input data: {e}")
        return 1

    payload = result.to_dict()
    if parsed.out is not None:
        _write_json(parsed.out, payload)
        logger.info(f"Wrote: {parsed.out}")

    if parsed.json:
        print(json.dumps(payload, indent=2))
    else:
        print(analyzer.format_result(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
