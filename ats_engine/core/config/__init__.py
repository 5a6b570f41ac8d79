from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    ai_provider: str = "openai"
    ai_model: str = "gpt-4o-mini"
    openai_base_url: str | None = None
    llm_timeout_s: float = 30.0
    api_key_refresh_s: float = 300.0
    log_level: str = "INFO"
    keyword_min_total: int = 5
    short_description_chars: int = 100
    job_description_max_chars: int = 5000
    resume_context_max_chars: int = 14000
    rules_path: str | None = None


def load_settings() -> Settings:
    return Settings(
        ai_provider=(_get_env("AI_PROVIDER", "openai") or "openai").strip().lower(),
        ai_model=(_get_env("AI_MODEL") or _get_env("OPENAI_MODEL") or "gpt-4o-mini").strip(),
        openai_base_url=_get_env("OPENAI_BASE_URL"),
        llm_timeout_s=_get_env_float("ATS_LLM_TIMEOUT_S", 30.0),
        api_key_refresh_s=_get_env_float("ATS_API_KEY_REFRESH_S", 300.0),
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        keyword_min_total=_get_env_int("ATS_KEYWORD_MIN_TOTAL", 5),
        short_description_chars=_get_env_int("ATS_SHORT_DESCRIPTION_CHARS", 100),
        job_description_max_chars=_get_env_int("ATS_JOB_DESCRIPTION_MAX_CHARS", 5000),
        resume_context_max_chars=_get_env_int("ATS_RESUME_CONTEXT_MAX_CHARS", 14000),
        rules_path=_get_env("ATS_RULES_PATH"),
    )


settings = load_settings()

if settings.keyword_min_total < 0:
    raise RuntimeError("ATS_KEYWORD_MIN_TOTAL must not be negative.")

__all__ = ["Settings", "load_settings", "settings"]
