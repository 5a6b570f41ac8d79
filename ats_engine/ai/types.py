from __future__ import annotations

from typing import Protocol


class CompletionClient(Protocol):
    """Give text back for a prompt, or raise an ``ExternalServiceError`` subclass."""

    def invoke(
        self,
        prompt: str,
        *,
        max_output_tokens: int,
        temperature: float,
        structured_output: bool = False,
        system_prompt: str | None = None,
    ) -> str: ...
