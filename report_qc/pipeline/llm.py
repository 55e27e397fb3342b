"""Thin text-completion wrapper over the Anthropic SDK."""

from __future__ import annotations

from typing import Optional

import anthropic

from report_qc.config import ANTHROPIC_API_KEY, HEAVY_TIMEOUT, QC_MODEL, QC_TEMPERATURE
from report_qc.pipeline.anthropic_retry import messages_create_with_retry


class ClaudeClient:
    """One-prompt, one-reply completions.

    The SDK's own retry loop is switched off; overload and rate-limit retries
    go through messages_create_with_retry with a fixed delay, and timeouts
    surface immediately as anthropic.APITimeoutError.
    """

    def __init__(
        self,
        api_key: str,
        model: str = QC_MODEL,
        temperature: float = QC_TEMPERATURE,
        client: Optional[anthropic.Anthropic] = None,
    ):
        self.model = model
        self.temperature = temperature
        self._client = client or anthropic.Anthropic(
            api_key=api_key, max_retries=0, timeout=HEAVY_TIMEOUT
        )

    def complete(
        self,
        prompt: str,
        max_tokens: int,
        timeout: Optional[float] = None,
        model: Optional[str] = None,
    ) -> str:
        kwargs = {}
        if timeout is not None:
            kwargs["timeout"] = timeout
        message = messages_create_with_retry(
            self._client,
            model=model or self.model,
            max_tokens=max_tokens,
            temperature=self.temperature,
            messages=[{"role": "user", "content": prompt}],
            **kwargs,
        )
        if not message.content:
            raise ValueError("Empty response from model")
        return message.content[0].text.strip()


def build_llm_client(api_key: Optional[str] = None) -> Optional[ClaudeClient]:
    """A ClaudeClient, or None when no API key is configured (AI phase skipped)."""
    key = api_key if api_key is not None else ANTHROPIC_API_KEY
    if not key:
        return None
    return ClaudeClient(api_key=key)
