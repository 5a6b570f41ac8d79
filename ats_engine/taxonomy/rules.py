from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ats_engine.matching.normalize import normalize_text

DEFAULT_RULES_PATH = Path(__file__).with_name("rules.json")

_REQUIRED_KEYS = (
    "version",
    "synonyms",
    "category_rules",
    "disallowed_patterns",
    "basic_patterns",
    "display_names",
    "generic_keywords",
    "title_qualifiers",
)


@dataclass(frozen=True)
class CategoryRule:
    category: str
    patterns: tuple[re.Pattern[str], ...]

    def matches(self, keyword: str) -> bool:
        return any(pattern.search(keyword) for pattern in self.patterns)


@dataclass(frozen=True)
class RuleTables:
    version: str
    synonyms: dict[str, tuple[str, ...]]
    category_rules: tuple[CategoryRule, ...]
    disallowed_patterns: tuple[re.Pattern[str], ...]
    basic_patterns: tuple[re.Pattern[str], ...]
    display_names: dict[str, str] = field(default_factory=dict)
    generic_keywords: tuple[str, ...] = ()
    title_qualifiers: frozenset[str] = frozenset()
    symbol_spellings: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_path(cls, path: str | Path) -> "RuleTables":
        rules_path = Path(path)
        try:
            with rules_path.open("r", encoding="utf-8") as handle:
                raw = json.load(handle)
        except OSError as exc:
            raise RuntimeError(f"Failed to read rule tables '{rules_path}': {exc}") from exc
        except json.JSONDecodeError as exc:
            raise RuntimeError(f"Invalid JSON in rule tables '{rules_path}': {exc}") from exc
        return cls.from_dict(raw, source=str(rules_path))

    @classmethod
    def from_dict(cls, raw: Any, *, source: str = "<memory>") -> "RuleTables":
        if not isinstance(raw, dict):
            raise RuntimeError(f"Invalid rule tables '{source}': expected a top-level mapping.")
        missing = [key for key in _REQUIRED_KEYS if key not in raw]
        if missing:
            raise RuntimeError(f"Invalid rule tables '{source}': missing keys {', '.join(missing)}.")

        try:
            synonyms = {
                normalize_text(canonical): tuple(normalize_text(alias) for alias in aliases)
                for canonical, aliases in raw["synonyms"].items()
            }
            category_rules = tuple(
                CategoryRule(
                    category=str(group["category"]),
                    patterns=tuple(re.compile(pattern, re.IGNORECASE) for pattern in group["patterns"]),
                )
                for group in raw["category_rules"]
            )
            disallowed = tuple(re.compile(pattern, re.IGNORECASE) for pattern in raw["disallowed_patterns"])
            basic = tuple(re.compile(pattern, re.IGNORECASE) for pattern in raw["basic_patterns"])
            spellings = {
                str(key).strip().lower(): normalize_text(str(value))
                for key, value in (raw.get("symbol_spellings") or {}).items()
            }
        except (KeyError, TypeError, AttributeError, re.error) as exc:
            raise RuntimeError(f"Invalid rule tables '{source}': {exc}") from exc

        return cls(
            version=str(raw["version"]),
            synonyms=synonyms,
            category_rules=category_rules,
            disallowed_patterns=disallowed,
            basic_patterns=basic,
            display_names={str(key).lower(): str(value) for key, value in raw["display_names"].items()},
            generic_keywords=tuple(str(item) for item in raw["generic_keywords"]),
            title_qualifiers=frozenset(str(item).lower() for item in raw["title_qualifiers"]),
            symbol_spellings=spellings,
        )

    def is_disallowed(self, keyword: str) -> bool:
        candidate = keyword.strip()
        return any(pattern.search(candidate) for pattern in self.disallowed_patterns)

    def spelled(self, keyword: str) -> str | None:
        """Word form for names made of symbols, e.g. ``c#`` -> ``csharp``."""
        return self.symbol_spellings.get(keyword.strip().lower())

    def category_for(self, keyword: str) -> str | None:
        for rule in self.category_rules:
            if rule.matches(keyword):
                return rule.category
        return None
