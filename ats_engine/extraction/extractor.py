from __future__ import annotations

import logging
from collections.abc import Sequence

from ats_engine.ai.parsing import Failure
from ats_engine.ai.types import CompletionClient
from ats_engine.core.config import Settings, settings as default_settings
from ats_engine.schemas import PersonalInfo, ResumeDocument, WorkExperience

from .strategy import DEFAULT_STRATEGIES, ExtractionStrategy, run_with_fallback

logger = logging.getLogger(__name__)

_UNAVAILABLE = "Not available due to processing error"


def build_error_placeholder(reason: str) -> ResumeDocument:
    """Deterministic document returned when no strategy produced a resume."""
    return ResumeDocument(
        personal_info=PersonalInfo(
            full_name="Error processing resume",
            email="Please try again or enter information manually",
            phone=_UNAVAILABLE,
            location=_UNAVAILABLE,
            country=_UNAVAILABLE,
            city=_UNAVAILABLE,
        ),
        summary=(
            "There was an error processing this resume. "
            "Please try again with a different file or enter your information manually."
        ),
        work_experience=[
            WorkExperience(
                id="exp-1",
                company=_UNAVAILABLE,
                position=_UNAVAILABLE,
                location=_UNAVAILABLE,
                start_date="2020-01-01",
                end_date=None,
                current=True,
                description="Error extracting work experience. Please enter manually.",
            )
        ],
        skills=[_UNAVAILABLE],
        note=f"Failed to parse resume: {reason}",
    )


class ResumeExtractor:
    def __init__(
        self,
        client: CompletionClient | None,
        *,
        settings: Settings | None = None,
        strategies: Sequence[ExtractionStrategy] | None = None,
    ):
        self.client = client
        self.settings = settings or default_settings
        self.strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES

    def extract(self, raw_text: str) -> ResumeDocument:
        """Structured resume from raw text. Never raises; failures yield the placeholder document."""
        text = (raw_text or "").strip()
        if not text:
            logger.info("resume_extraction source=placeholder reason=empty_input")
            return build_error_placeholder("Resume text is empty.")
        if self.client is None:
            logger.info("resume_extraction source=placeholder reason=no_client")
            return build_error_placeholder("No completion client is configured.")

        max_chars = self.settings.resume_context_max_chars
        truncated = len(text) > max_chars
        if truncated:
            logger.info("resume_text_truncated chars=%s max_chars=%s", len(text), max_chars)
            text = text[:max_chars]

        try:
            outcome = run_with_fallback(self.strategies, self.client, text, truncated=truncated)
        except Exception as exc:
            logger.exception("resume_extraction_unexpected_error")
            return build_error_placeholder(str(exc) or exc.__class__.__name__)

        if isinstance(outcome, Failure):
            logger.info("resume_extraction source=placeholder reason=%s", outcome.error.code)
            return build_error_placeholder(str(outcome.error))

        strategy_name, document = outcome.value
        logger.info(
            "resume_extraction source=%s experience=%s education=%s",
            strategy_name,
            len(document.work_experience),
            len(document.education),
        )
        return document
