from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from ats_engine.ai.types import CompletionClient
from ats_engine.errors import ATSEngineError, ParseError, ServerError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*([\s\S]*?)```$", re.IGNORECASE)


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    ok: bool = True


@dataclass(frozen=True)
class Failure:
    error: ATSEngineError
    ok: bool = False


Outcome = Union[Success[T], Failure]


def strip_code_fence(content: str) -> str:
    cleaned = (content or "").strip()
    if cleaned.startswith("```") and cleaned.endswith("```"):
        match = _CODE_FENCE_RE.match(cleaned)
        if match:
            return match.group(1).strip()
    return cleaned


def parse_json_object(content: str) -> dict[str, Any]:
    """Parse a model response that must be a single JSON object."""
    cleaned = strip_code_fence(content)
    if not cleaned.startswith("{"):
        raise ParseError("Model response is not a structured object.")
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Model response is not valid JSON: {exc.msg}") from exc
    if not isinstance(parsed, dict):
        raise ParseError("Model response is not a structured object.")
    return parsed


def invoke_and_parse(
    client: CompletionClient,
    prompt: str,
    parser: Callable[[str], T],
    *,
    max_output_tokens: int,
    temperature: float,
    structured_output: bool = True,
    system_prompt: str | None = None,
    stage: str = "unknown",
) -> Outcome[T]:
    """Call the model once and parse its text; every failure comes back as a ``Failure``."""
    try:
        content = client.invoke(
            prompt,
            max_output_tokens=max_output_tokens,
            temperature=temperature,
            structured_output=structured_output,
            system_prompt=system_prompt,
        )
        return Success(parser(content))
    except ATSEngineError as exc:
        logger.warning("llm_stage_failed stage=%s code=%s: %s", stage, exc.code, exc)
        return Failure(exc)
    except Exception as exc:  # noqa: BLE001 - callers fall back deterministically
        logger.warning("llm_stage_failed stage=%s code=llm_exception: %s", stage, exc)
        wrapped = ServerError(str(exc) or exc.__class__.__name__)
        wrapped.__cause__ = exc
        return Failure(wrapped)
