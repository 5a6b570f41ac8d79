from __future__ import annotations

from dataclasses import dataclass

from ats_engine.core.config import Settings, settings as default_settings


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    base_url: str | None = None
    timeout_s: float = 30.0
    api_key_refresh_s: float = 300.0


def load_ai_config(settings: Settings | None = None) -> AIConfig:
    active = settings or default_settings
    return AIConfig(
        provider=active.ai_provider,
        model=active.ai_model,
        base_url=active.openai_base_url,
        timeout_s=active.llm_timeout_s,
        api_key_refresh_s=active.api_key_refresh_s,
    )
