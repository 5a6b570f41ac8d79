from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ats_engine.core.config.scoring import get_scoring_value
from ats_engine.matching.normalize import normalize_text
from ats_engine.matching.variations import keyword_present
from ats_engine.schemas import (
    CATEGORY_KEYS,
    CategoryKeywords,
    JobKeywordSet,
    JobSpecificScore,
    KeywordsFeedback,
    ResumeDocument,
)
from ats_engine.taxonomy import RuleTables

logger = logging.getLogger(__name__)


def _category_lists(keyword_set: JobKeywordSet | Mapping[str, Any] | None) -> dict[str, list[str]]:
    if isinstance(keyword_set, JobKeywordSet):
        return keyword_set.categories()
    raw = keyword_set or {}
    lists: dict[str, list[str]] = {key: [] for key in CATEGORY_KEYS}
    for key, value in raw.items():
        if isinstance(value, (list, tuple)):
            lists[str(key)] = [item for item in value if isinstance(item, str) and item.strip()]
    return lists


def _weight(weights: Mapping[str, Any], category: str) -> float:
    return float(weights.get(category, weights.get("default", 1.0)))


def score_job_specific(
    resume: ResumeDocument,
    keyword_set: JobKeywordSet | Mapping[str, Any] | None,
    *,
    rules: RuleTables | None = None,
) -> JobSpecificScore:
    """Weighted share of the job's keywords that the resume covers, 0-100."""
    raw_text = resume.search_text()
    normalized = normalize_text(raw_text)
    weights = get_scoring_value("job_specific.weights", {}) or {}

    categories: dict[str, CategoryKeywords] = {}
    weighted_found = 0.0
    weighted_total = 0.0
    for category, keywords in _category_lists(keyword_set).items():
        found: list[str] = []
        missing: list[str] = []
        for keyword in keywords:
            if keyword_present(raw_text, normalized, keyword, rules=rules):
                found.append(keyword)
            else:
                missing.append(keyword)
        categories[category] = CategoryKeywords(found=found, missing=missing, all=list(keywords))
        weight = _weight(weights, category)
        weighted_found += len(found) * weight
        weighted_total += len(keywords) * weight

    score = int(round(100 * weighted_found / weighted_total)) if weighted_total > 0 else 0
    feedback = KeywordsFeedback(
        found=[item for entry in categories.values() for item in entry.found],
        missing=[item for entry in categories.values() for item in entry.missing],
        all=[item for entry in categories.values() for item in entry.all],
        categories=categories,
    )
    logger.info(
        "job_specific_score score=%s found=%s total=%s",
        score,
        len(feedback.found),
        len(feedback.all),
    )
    return JobSpecificScore(score=score, keywords_feedback=feedback)
