from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

_DEFAULT_SCORING_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "scoring.yaml"
_cache: dict[Path, dict[str, Any]] = {}


def scoring_config_path() -> Path:
    override = (os.getenv("ATS_SCORING_CONFIG") or "").strip()
    return Path(override) if override else _DEFAULT_SCORING_CONFIG_PATH


def _load(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise RuntimeError(f"Scoring config not found at '{path}'. Set ATS_SCORING_CONFIG or add config/scoring.yaml.")
    try:
        with path.open("r", encoding="utf-8") as handle:
            parsed = yaml.safe_load(handle)
    except OSError as exc:
        raise RuntimeError(f"Failed to read scoring config '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in scoring config '{path}': {exc}") from exc
    if not isinstance(parsed, dict):
        raise RuntimeError(f"Invalid scoring config '{path}': expected a top-level mapping.")
    return parsed


def get_scoring_config() -> dict[str, Any]:
    """Rubric weights, caps and thresholds, loaded once per config path."""
    path = scoring_config_path()
    if path not in _cache:
        _cache[path] = _load(path)
    return _cache[path]


def reset_scoring_config_cache() -> None:
    _cache.clear()


def get_scoring_value(path: str, default: Any = None) -> Any:
    """Nested lookup by dotted path, e.g. ``general.keyword_match.max``; ``default`` when absent."""
    if not path:
        return default
    node: Any = get_scoring_config()
    for key in path.split("."):
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node
