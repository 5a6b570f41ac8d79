from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable

from ats_engine.ai.parsing import Failure, Outcome, Success, invoke_and_parse
from ats_engine.ai.types import CompletionClient
from ats_engine.errors import EmptyResponseError, ParseError
from ats_engine.schemas import ResumeDocument

from .prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    SINGLE_PASS_SYSTEM_PROMPT,
    STRUCTURING_SYSTEM_PROMPT,
    build_analysis_prompt,
    build_single_pass_prompt,
    build_structuring_prompt,
)
from .repair import parse_resume_payload

logger = logging.getLogger(__name__)

TRUNCATION_NOTE = "Resume was truncated during processing due to length."
SINGLE_PASS_NOTE = "Resume was processed using single-pass approach due to complexity."


def _require_text(content: str) -> str:
    text = (content or "").strip()
    if not text:
        raise EmptyResponseError("Model returned an empty analysis.")
    return text


@dataclass(frozen=True)
class PromptPass:
    """One model call. Intermediate passes return text, the last one returns the document."""

    name: str
    system_prompt: str
    build_prompt: Callable[[str], str]
    structured_output: bool
    max_output_tokens: int = 4000
    temperature: float = 0.1


@dataclass(frozen=True)
class ExtractionStrategy:
    name: str
    passes: tuple[PromptPass, ...]
    note: str | None = None
    truncation_note: str | None = None
    attempts: int = 1

    def _run_once(self, client: CompletionClient, text: str) -> Outcome[ResumeDocument]:
        content = text
        for step in self.passes[:-1]:
            outcome = invoke_and_parse(
                client,
                step.build_prompt(content),
                _require_text,
                max_output_tokens=step.max_output_tokens,
                temperature=step.temperature,
                structured_output=step.structured_output,
                system_prompt=step.system_prompt,
                stage=f"{self.name}.{step.name}",
            )
            if isinstance(outcome, Failure):
                return outcome
            content = outcome.value

        final = self.passes[-1]
        return invoke_and_parse(
            client,
            final.build_prompt(content),
            parse_resume_payload,
            max_output_tokens=final.max_output_tokens,
            temperature=final.temperature,
            structured_output=final.structured_output,
            system_prompt=final.system_prompt,
            stage=f"{self.name}.{final.name}",
        )

    def run(self, client: CompletionClient, text: str, *, truncated: bool = False) -> Outcome[ResumeDocument]:
        if not self.passes:
            return Failure(ParseError(f"Extraction strategy '{self.name}' has no passes."))
        outcome: Outcome[ResumeDocument] = Failure(ParseError("Extraction was not attempted."))
        for _ in range(max(1, self.attempts)):
            outcome = self._run_once(client, text)
            if isinstance(outcome, Success):
                break
        if isinstance(outcome, Failure):
            return outcome

        note = self.note
        if note is None and truncated:
            note = self.truncation_note
        return Success(outcome.value.model_copy(update={"note": note}))


TWO_PASS = ExtractionStrategy(
    name="two_pass",
    passes=(
        PromptPass(
            name="analysis",
            system_prompt=ANALYSIS_SYSTEM_PROMPT,
            build_prompt=build_analysis_prompt,
            structured_output=False,
        ),
        PromptPass(
            name="structuring",
            system_prompt=STRUCTURING_SYSTEM_PROMPT,
            build_prompt=build_structuring_prompt,
            structured_output=True,
        ),
    ),
    truncation_note=TRUNCATION_NOTE,
)

SINGLE_PASS = ExtractionStrategy(
    name="single_pass",
    passes=(
        PromptPass(
            name="parse",
            system_prompt=SINGLE_PASS_SYSTEM_PROMPT,
            build_prompt=build_single_pass_prompt,
            structured_output=True,
        ),
    ),
    note=SINGLE_PASS_NOTE,
)

DEFAULT_STRATEGIES: tuple[ExtractionStrategy, ...] = (TWO_PASS, SINGLE_PASS)


def run_with_fallback(
    strategies: Sequence[ExtractionStrategy],
    client: CompletionClient,
    text: str,
    *,
    truncated: bool = False,
) -> Outcome[tuple[str, ResumeDocument]]:
    """Try each strategy in order, once each; the first success wins."""
    failure: Failure = Failure(ParseError("No extraction strategy configured."))
    for strategy in strategies:
        outcome = strategy.run(client, text, truncated=truncated)
        if isinstance(outcome, Success):
            return Success((strategy.name, outcome.value))
        failure = outcome
        logger.warning(
            "resume_extraction_strategy_failed strategy=%s code=%s",
            strategy.name,
            outcome.error.code,
        )
    return failure
