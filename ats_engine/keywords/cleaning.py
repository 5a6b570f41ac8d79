from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ats_engine.core.config.scoring import get_scoring_value
from ats_engine.schemas import CATEGORY_KEYS, JobKeywordSet
from ats_engine.taxonomy import RuleTables, get_default_rules


def _bounds() -> tuple[int, int]:
    return (
        int(get_scoring_value("keywords.min_item_chars", 2)),
        int(get_scoring_value("keywords.max_item_chars", 50)),
    )


def clean_keywords(
    items: Iterable[Any] | None,
    *,
    rules: RuleTables | None = None,
    max_items: int | None = None,
) -> list[str]:
    """Trim, bound, filter and case-insensitively dedupe one category of keywords."""
    active_rules = rules or get_default_rules()
    min_chars, max_chars = _bounds()
    cap = max_items if max_items is not None else int(get_scoring_value("keywords.max_items_per_category", 10))

    output: list[str] = []
    seen: set[str] = set()
    for item in items or []:
        if not isinstance(item, str):
            continue
        value = " ".join(item.split())
        if len(value) < min_chars or len(value) > max_chars:
            continue
        if active_rules.is_disallowed(value):
            continue
        key = value.lower()
        if key in seen:
            continue
        seen.add(key)
        output.append(value)
        if len(output) >= cap:
            break
    return output


def clean_keyword_set(
    raw: Mapping[str, Any] | None,
    *,
    rules: RuleTables | None = None,
    max_items: int | None = None,
) -> JobKeywordSet:
    payload = raw or {}
    cleaned = {
        key: clean_keywords(
            payload.get(key) if isinstance(payload.get(key), list) else [],
            rules=rules,
            max_items=max_items,
        )
        for key in CATEGORY_KEYS
    }
    return JobKeywordSet.model_validate(cleaned)
