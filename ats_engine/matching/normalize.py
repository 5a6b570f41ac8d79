from __future__ import annotations

import re

_PUNCT_RE = re.compile(r"[^\w\s]")
_SPACE_RE = re.compile(r"\s+")


def normalize_text(text: str | None) -> str:
    """Lowercase, turn punctuation into spaces and collapse whitespace."""
    if not text:
        return ""
    lowered = text.lower()
    return _SPACE_RE.sub(" ", _PUNCT_RE.sub(" ", lowered)).strip()
