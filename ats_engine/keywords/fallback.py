from __future__ import annotations

from collections.abc import Iterable

from ats_engine.schemas import CATEGORY_KEYS, JobKeywordSet
from ats_engine.taxonomy import RuleTables, get_default_rules

from .cleaning import clean_keyword_set

_UNMATCHED_CATEGORY = "industryTerms"


def categorize_by_patterns(
    keywords: Iterable[str],
    *,
    rules: RuleTables | None = None,
) -> JobKeywordSet:
    """Bucket a flat keyword list with the ordered rule groups; no model involved."""
    active_rules = rules or get_default_rules()
    buckets: dict[str, list[str]] = {key: [] for key in CATEGORY_KEYS}
    for keyword in keywords:
        if not isinstance(keyword, str) or not keyword.strip():
            continue
        category = active_rules.category_for(keyword) or _UNMATCHED_CATEGORY
        buckets.setdefault(category, []).append(keyword.strip())
    return clean_keyword_set(buckets, rules=active_rules)
