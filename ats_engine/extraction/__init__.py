from .extractor import ResumeExtractor, build_error_placeholder
from .repair import PLACEHOLDER_PERSONAL_INFO, parse_resume_payload, repair_resume_payload
from .strategy import (
    DEFAULT_STRATEGIES,
    SINGLE_PASS,
    SINGLE_PASS_NOTE,
    TRUNCATION_NOTE,
    TWO_PASS,
    ExtractionStrategy,
    PromptPass,
    run_with_fallback,
)

__all__ = [
    "DEFAULT_STRATEGIES",
    "ExtractionStrategy",
    "PLACEHOLDER_PERSONAL_INFO",
    "PromptPass",
    "ResumeExtractor",
    "SINGLE_PASS",
    "SINGLE_PASS_NOTE",
    "TRUNCATION_NOTE",
    "TWO_PASS",
    "build_error_placeholder",
    "parse_resume_payload",
    "repair_resume_payload",
    "run_with_fallback",
]
