from __future__ import annotations

import re
from functools import lru_cache

from ats_engine.taxonomy import RuleTables, get_default_rules

from .normalize import normalize_text

_ACRONYM_MIN_CHARS = 2
_ACRONYM_MAX_CHARS = 6
_SUBSTRING_MIN_CHARS = 3
_SEPARATOR_RE = re.compile(r"[-\s]")


@lru_cache(maxsize=2048)
def _phrase_pattern(phrase: str) -> re.Pattern[str]:
    return re.compile(rf"(?<!\w){re.escape(phrase)}(?!\w)")


def _contains_phrase(text: str, phrase: str) -> bool:
    if not phrase:
        return False
    return bool(_phrase_pattern(phrase).search(text))


def _contains(haystack: str, term: str, *, whole_word: bool) -> bool:
    return _contains_phrase(haystack, term) if whole_word else term in haystack


def _needs_whole_word(raw_keyword: str, normalized_keyword: str) -> bool:
    # Short names and names that lose symbols ("C#" -> "c", ".NET" -> "net") sit inside ordinary words.
    if len(normalized_keyword) < _SUBSTRING_MIN_CHARS:
        return True
    return normalized_keyword != " ".join(raw_keyword.lower().split())


def _plural_match(haystack: str, keyword: str, *, whole_word: bool = False) -> bool:
    # Very short terms ("aws", "ms") would degrade into noise when a letter is dropped.
    if len(keyword) <= 3:
        return False
    if keyword.endswith("s"):
        singular, plural = keyword[:-1], keyword
    else:
        singular, plural = keyword, f"{keyword}s"
    return _contains(haystack, singular, whole_word=whole_word) or _contains(haystack, plural, whole_word=whole_word)


def _synonym_match(haystack: str, keyword: str, rules: RuleTables) -> bool:
    for canonical, aliases in rules.synonyms.items():
        forms = (canonical, *aliases)
        if not any(_contains_phrase(keyword, form) for form in forms):
            continue
        if any(_contains_phrase(haystack, form) for form in forms):
            return True
    return False


def _acronym_pattern(raw_keyword: str) -> re.Pattern[str] | None:
    candidate = raw_keyword.strip()
    if not (_ACRONYM_MIN_CHARS <= len(candidate) <= _ACRONYM_MAX_CHARS):
        return None
    if not candidate.isalpha() or not candidate.isupper():
        return None
    letters = [re.escape(char) for char in candidate.lower()]
    return re.compile(r"\b" + r"\w*\s+".join(letters) + r"\w*\b")


def _separator_match(haystack: str, raw_keyword: str) -> bool:
    lowered = raw_keyword.strip().lower()
    if not _SEPARATOR_RE.search(lowered):
        return False
    separated = normalize_text(lowered.replace("-", " "))
    combined = separated.replace(" ", "")
    return bool(combined and combined in haystack) or bool(separated and separated in haystack)


def matches(normalized_haystack: str, keyword: str, *, rules: RuleTables | None = None) -> bool:
    """Decide whether ``keyword`` is present in already-normalized text.

    Checks run cheapest first and stop at the first hit: direct containment,
    singular/plural toggle, synonym table, acronym expansion, separator variants.
    Keywords shorter than three characters or spelled with symbols must match
    whole words; symbol names with a word spelling ("C#" as "csharp") use it.
    """
    active_rules = rules or get_default_rules()
    spelled = active_rules.spelled(keyword)
    normalized_keyword = spelled or normalize_text(keyword)
    if not normalized_keyword or not normalized_haystack:
        return False
    whole_word = spelled is not None or _needs_whole_word(keyword, normalized_keyword)

    if _contains(normalized_haystack, normalized_keyword, whole_word=whole_word):
        return True

    if _plural_match(normalized_haystack, normalized_keyword, whole_word=whole_word):
        return True

    if _synonym_match(normalized_haystack, normalized_keyword, active_rules):
        return True

    acronym = _acronym_pattern(keyword)
    if acronym is not None and acronym.search(normalized_haystack):
        return True

    return _separator_match(normalized_haystack, keyword)


def keyword_present(
    raw_text: str,
    normalized_text: str,
    keyword: str,
    *,
    rules: RuleTables | None = None,
) -> bool:
    """Raw lowercase containment first, then the variation checks on normalized text."""
    lowered = keyword.strip().lower()
    if lowered and _contains(raw_text, lowered, whole_word=len(lowered) < _SUBSTRING_MIN_CHARS):
        return True
    return matches(normalized_text, keyword, rules=rules)
