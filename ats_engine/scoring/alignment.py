from __future__ import annotations

import re

from ats_engine.core.config.scoring import get_scoring_value
from ats_engine.schemas import CareerAlignment
from ats_engine.taxonomy import RuleTables, get_default_rules

_TOKEN_RE = re.compile(r"[a-z0-9+#]+")


def title_tokens(title: str | None, *, rules: RuleTables | None = None) -> list[str]:
    """Significant lower-cased words of a job title, qualifiers like "senior" removed."""
    active_rules = rules or get_default_rules()
    min_chars = int(get_scoring_value("alignment.min_token_chars", 4))
    tokens: list[str] = []
    for token in _TOKEN_RE.findall((title or "").lower()):
        if len(token) < min_chars or token in active_rules.title_qualifiers:
            continue
        if token not in tokens:
            tokens.append(token)
    return tokens


def shares_significant_word(position: str | None, title: str | None, *, rules: RuleTables | None = None) -> bool:
    position_lower = (position or "").strip().lower()
    title_lower = (title or "").strip().lower()
    if not position_lower or not title_lower:
        return False
    if position_lower in title_lower or title_lower in position_lower:
        return True
    target = set(title_tokens(title_lower, rules=rules))
    return any(token in target for token in title_tokens(position_lower, rules=rules))


def overlap_percentage(
    current_position: str | None,
    target_title: str | None,
    *,
    rules: RuleTables | None = None,
) -> float:
    current = title_tokens(current_position, rules=rules)
    target = title_tokens(target_title, rules=rules)
    common = len(set(current) & set(target))
    return 100.0 * min(common / max(1, len(current)), common / max(1, len(target)))


def classify_career_alignment(
    current_position: str | None,
    target_title: str | None,
    *,
    rules: RuleTables | None = None,
) -> CareerAlignment:
    overlap = overlap_percentage(current_position, target_title, rules=rules)
    career_change = float(get_scoring_value("alignment.thresholds.career_change", 30))
    somewhat_related = float(get_scoring_value("alignment.thresholds.somewhat_related", 50))
    related = float(get_scoring_value("alignment.thresholds.related", 70))

    if overlap < career_change:
        classification = "CareerChange"
    elif overlap <= somewhat_related:
        classification = "SomewhatRelated"
    elif overlap <= related:
        classification = "Related"
    else:
        classification = "HighlyAligned"
    return CareerAlignment(overlap_percentage=round(overlap, 2), classification=classification)
