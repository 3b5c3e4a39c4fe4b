"""Command line entry point for scoring dictation answers."""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel

from dictation_scorer.analysis.statistics import calculate_quiz_score, generate_statistics
from dictation_scorer.config import Settings, build_context_scorer, build_engine
from dictation_scorer.models.scoring import ScoreResult, ScoringContext

logger = structlog.get_logger()

EXIT_USAGE = 2


class BatchItem(BaseModel):
    """One answer in a batch file."""

    answer: str
    reference: str
    difficulty: str | None = None


def configure_logging(settings: Settings) -> None:
    """Configure structlog; JSON output in production, console otherwise."""
    is_production = os.getenv("ENV", "development").lower() == "production"
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    if is_production or settings.log_format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        # stdout carries the JSON results
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def parse_option(raw: str) -> tuple[str, Any]:
    """Parse a ``key=value`` option; the value is read as YAML (true, 0.2, ...)."""
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {raw!r}")
    return key.strip(), yaml.safe_load(value)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the dictation-scorer CLI."""
    parser = argparse.ArgumentParser(
        prog="dictation-scorer",
        description="Score typed dictation answers against reference sentences.",
    )
    parser.add_argument(
        "-O",
        "--option",
        action="append",
        type=parse_option,
        default=[],
        metavar="KEY=VALUE",
        help="Override a scoring option, e.g. -O spellingTolerance=0.2 (repeatable).",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    score_p = sub.add_parser("score", help="Score a single answer")
    score_p.add_argument("answer", help="Text typed by the learner")
    score_p.add_argument("reference", help="Reference sentence")
    score_p.add_argument("-d", "--difficulty", default=None, help="easy, medium or hard")

    batch_p = sub.add_parser("batch", help="Score every answer in a YAML file")
    batch_p.add_argument("path", type=Path, help="YAML list of {answer, reference, difficulty}")
    batch_p.add_argument(
        "--context",
        action="store_true",
        help="Apply context-aware bonuses using the running score history.",
    )

    return parser


def load_batch(path: Path) -> list[BatchItem]:
    """Read batch items from a YAML file (a list, or a mapping with ``items``)."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or []
    if isinstance(data, dict):
        data = data.get("items", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of answers")
    return [BatchItem.model_validate(item) for item in data]


def run_score(args: argparse.Namespace, settings: Settings) -> dict:
    engine = build_engine(settings, dict(args.option))
    difficulty = args.difficulty or settings.default_difficulty
    result = engine.score(args.answer, args.reference, difficulty)
    return result.model_dump(mode="json")


def run_batch(args: argparse.Namespace, settings: Settings) -> dict:
    items = load_batch(args.path)
    scorer = build_context_scorer(settings, dict(args.option))

    results: list[ScoreResult] = []
    for index, item in enumerate(items, start=1):
        difficulty = item.difficulty or settings.default_difficulty
        if args.context:
            context = ScoringContext(
                difficulty=difficulty,
                previous_scores=tuple(r.score for r in results),
                question_index=index,
                total_questions=len(items),
            )
            result = scorer.score_with_context(item.answer, item.reference, context)
        else:
            result = scorer.engine.score(item.answer, item.reference, difficulty)
        results.append(result)

    logger.info("batch_scored", path=str(args.path), count=len(results))
    statistics = generate_statistics(results)
    return {
        "results": [r.model_dump(mode="json") for r in results],
        "statistics": statistics.model_dump(mode="json") if statistics else None,
        "quiz": calculate_quiz_score(results).model_dump(mode="json"),
    }


def main(argv: list[str] | None = None) -> int:
    """Run the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings()
    # Logging is not configured yet and stdout is reserved for results
    except (ValueError, yaml.YAMLError) as e:
        print(f"dictation-scorer: error: invalid settings: {e}", file=sys.stderr)
        return EXIT_USAGE
    configure_logging(settings)

    try:
        if args.cmd == "score":
            output = run_score(args, settings)
        else:
            output = run_batch(args, settings)
    # ScoringConfigError and pydantic ValidationError are both ValueErrors
    except (ValueError, yaml.YAMLError, OSError) as e:
        logger.error("invalid_input", cmd=args.cmd, error=str(e))
        print(f"dictation-scorer: error: {e}", file=sys.stderr)
        return EXIT_USAGE

    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
