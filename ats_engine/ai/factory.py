from ats_engine.ai.config import AIConfig, load_ai_config
from ats_engine.ai.credentials import ApiKeySource
from ats_engine.ai.types import CompletionClient

from ats_engine.ai.providers.openai_provider import OpenAIProvider


def get_completion_client(
    config: AIConfig | None = None,
    key_source: ApiKeySource | None = None,
) -> CompletionClient:
    cfg = config or load_ai_config()

    if cfg.provider == "openai":
        return OpenAIProvider(cfg, key_source=key_source)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
