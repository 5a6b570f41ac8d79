from __future__ import annotations

import logging
import time

import openai
from openai import OpenAI

from ats_engine.ai.config import AIConfig
from ats_engine.ai.credentials import ApiKeySource
from ats_engine.errors import (
    AuthError,
    EmptyResponseError,
    ExternalServiceError,
    RateLimitError,
    ServerError,
)

logger = logging.getLogger(__name__)


def _map_openai_error(exc: Exception) -> ExternalServiceError:
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return AuthError("Authentication error: invalid API key or token for the language model service.")
    if isinstance(exc, openai.RateLimitError):
        return RateLimitError("Rate limit or quota exceeded on the language model service.")
    if isinstance(exc, openai.APITimeoutError):
        return ServerError("Language model request timed out.", code="llm_timeout")
    if isinstance(exc, openai.APIConnectionError):
        return ServerError("Could not reach the language model service.")
    if isinstance(exc, openai.APIStatusError):
        return ServerError(f"Language model service error (status {exc.status_code}). Please try again later.")
    return ServerError(f"Language model call failed: {exc}")


class OpenAIProvider:
    def __init__(self, config: AIConfig, key_source: ApiKeySource | None = None):
        self._config = config
        self._key_source = key_source or ApiKeySource(ttl_s=config.api_key_refresh_s)
        self._client: OpenAI | None = None
        self._client_key: str | None = None

    @property
    def model(self) -> str:
        return self._config.model

    def _get_client(self) -> OpenAI:
        key = self._key_source.get()
        if self._client is None or key != self._client_key:
            # The fallback chains are the only retries; the SDK must not add its own.
            self._client = OpenAI(
                api_key=key,
                base_url=self._config.base_url or None,
                timeout=self._config.timeout_s,
                max_retries=0,
            )
            self._client_key = key
        return self._client

    def invoke(
        self,
        prompt: str,
        *,
        max_output_tokens: int,
        temperature: float,
        structured_output: bool = False,
        system_prompt: str | None = None,
    ) -> str:
        started = time.perf_counter()
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        create_kwargs = {
            "model": self._config.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_output_tokens,
        }
        if structured_output:
            create_kwargs["response_format"] = {"type": "json_object"}

        try:
            response = self._get_client().chat.completions.create(**create_kwargs)
        except openai.OpenAIError as exc:
            mapped = _map_openai_error(exc)
            if isinstance(mapped, AuthError):
                self._key_source.invalidate()
            logger.warning(
                "llm_call model=%s status=error code=%s prompt_len=%s latency_ms=%s",
                self._config.model,
                mapped.code,
                len(prompt),
                int((time.perf_counter() - started) * 1000),
            )
            raise mapped from exc

        content = response.choices[0].message.content if response.choices else ""
        latency_ms = int((time.perf_counter() - started) * 1000)
        if not content or not content.strip():
            logger.warning("llm_call model=%s status=empty latency_ms=%s", self._config.model, latency_ms)
            raise EmptyResponseError("Empty response from the language model service.")

        logger.info(
            "llm_call model=%s status=success structured=%s latency_ms=%s",
            self._config.model,
            structured_output,
            latency_ms,
        )
        return content
