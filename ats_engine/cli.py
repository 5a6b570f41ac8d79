from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from ats_engine.ai.factory import get_completion_client
from ats_engine.core.config import settings
from ats_engine.core.log_config import configure_logging
from ats_engine.errors import ATSEngineError
from ats_engine.extraction import ResumeExtractor
from ats_engine.keywords import KeywordCategorizer
from ats_engine.schemas import ResumeDocument
from ats_engine.services import calculate_ats_score

logger = logging.getLogger(__name__)


def _read_text(path: str | None) -> str | None:
    if not path:
        return None
    return Path(path).read_text(encoding="utf-8")


def _cmd_score(args: argparse.Namespace) -> str:
    try:
        resume = ResumeDocument.model_validate(json.loads(Path(args.resume).read_text(encoding="utf-8")))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ATSEngineError(f"Could not read resume JSON: {exc}", code="invalid_resume", status_code=400) from exc
    report = calculate_ats_score(
        resume,
        job_title=args.job_title,
        job_description=_read_text(args.job_description_file),
    )
    return report.model_dump_json(by_alias=True, indent=2)


def _cmd_extract(args: argparse.Namespace) -> str:
    document = ResumeExtractor(get_completion_client()).extract(_read_text(args.text_file) or "")
    return document.model_dump_json(by_alias=True, indent=2)


def _cmd_keywords(args: argparse.Namespace) -> str:
    categorizer = KeywordCategorizer(get_completion_client())
    keyword_set = categorizer.categorize(args.job_title, _read_text(args.job_description_file) or "")
    return json.dumps(keyword_set.categories(), indent=2)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ats_engine", description="Resume ATS scoring and extraction.")
    sub = parser.add_subparsers(dest="command", required=True)

    score = sub.add_parser("score", help="Score a structured resume, optionally against a job.")
    score.add_argument("--resume", required=True, help="Path to resume JSON (camelCase fields)")
    score.add_argument("--job-title", default=None, help="Target job title")
    score.add_argument("--job-description-file", default=None, help="Path to job description text")
    score.set_defaults(handler=_cmd_score)

    extract = sub.add_parser("extract", help="Extract a structured resume from plain text.")
    extract.add_argument("--text-file", required=True, help="Path to resume text")
    extract.set_defaults(handler=_cmd_extract)

    keywords = sub.add_parser("keywords", help="Categorize keywords from a job description.")
    keywords.add_argument("--job-title", required=True, help="Job title")
    keywords.add_argument("--job-description-file", required=True, help="Path to job description text")
    keywords.set_defaults(handler=_cmd_keywords)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings)
    try:
        output = args.handler(args)
    except ATSEngineError as exc:
        logger.error("cli_failed command=%s code=%s", args.command, exc.code)
        print(json.dumps(exc.to_dict()), file=sys.stderr)
        return 1
    except OSError as exc:
        print(json.dumps({"error": "io_error", "message": str(exc)}), file=sys.stderr)
        return 1
    print(output)
    return 0
