from __future__ import annotations

from ats_engine.core.config.scoring import get_scoring_value
from ats_engine.taxonomy import RuleTables, get_default_rules


def _display_name(keyword: str, rules: RuleTables) -> str:
    normalized = " ".join(keyword.lower().split())
    if normalized in rules.display_names:
        return rules.display_names[normalized]
    return " ".join(word[:1].upper() + word[1:].lower() for word in normalized.split(" "))


def extract_basic_keywords(
    job_description: str,
    *,
    rules: RuleTables | None = None,
    limit: int | None = None,
) -> list[str]:
    """Deterministic keyword scan used whenever the model is unavailable or too thin."""
    min_chars = int(get_scoring_value("keywords.basic_extraction_min_chars", 20))
    cap = limit if limit is not None else int(get_scoring_value("keywords.basic_extraction_limit", 15))
    text = (job_description or "").strip()
    if len(text) < min_chars:
        return []

    active_rules = rules or get_default_rules()
    found: list[str] = []
    seen: set[str] = set()
    for pattern in active_rules.basic_patterns:
        for match in pattern.finditer(text):
            raw = match.group(0).strip()
            key = " ".join(raw.lower().split())
            if key in seen:
                continue
            seen.add(key)
            found.append(raw)

    output: list[str] = []
    for keyword in found:
        display = _display_name(keyword, active_rules)
        if len(display) > 1:
            output.append(display)
        if len(output) >= cap:
            break
    return output
