"""ClaudeClient and the fixed-delay retry helper, against a mocked SDK client."""
from unittest.mock import MagicMock

import anthropic
import httpx
import pytest

from report_qc.pipeline.anthropic_retry import messages_create_with_retry
from report_qc.pipeline.llm import ClaudeClient

REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _rate_limit():
    return anthropic.RateLimitError(
        "rate limited", response=httpx.Response(429, request=REQUEST), body=None
    )


def _message(text):
    block = MagicMock()
    block.text = text
    message = MagicMock()
    message.content = [block]
    return message


def test_complete_sends_deterministic_request():
    sdk = MagicMock()
    sdk.messages.create.return_value = _message("  hello  ")
    client = ClaudeClient(api_key="test", model="claude-test", client=sdk)

    assert client.complete("prompt", max_tokens=100, timeout=15.0) == "hello"

    kwargs = sdk.messages.create.call_args.kwargs
    assert kwargs["temperature"] == 0.0
    assert kwargs["model"] == "claude-test"
    assert kwargs["max_tokens"] == 100
    assert kwargs["timeout"] == 15.0
    assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]


def test_complete_rejects_empty_content():
    sdk = MagicMock()
    sdk.messages.create.return_value = MagicMock(content=[])
    client = ClaudeClient(api_key="test", client=sdk)

    with pytest.raises(ValueError):
        client.complete("prompt", max_tokens=10)


def test_rate_limit_is_retried_with_fixed_delay():
    sdk = MagicMock()
    sdk.messages.create.side_effect = [_rate_limit(), _rate_limit(), "ok"]

    assert messages_create_with_retry(sdk, max_retries=2, delay=0, model="m") == "ok"
    assert sdk.messages.create.call_count == 3


def test_retries_are_bounded():
    sdk = MagicMock()
    sdk.messages.create.side_effect = _rate_limit()

    with pytest.raises(anthropic.RateLimitError):
        messages_create_with_retry(sdk, max_retries=2, delay=0)
    assert sdk.messages.create.call_count == 3


def test_timeouts_are_not_retried():
    sdk = MagicMock()
    sdk.messages.create.side_effect = anthropic.APITimeoutError(request=REQUEST)

    with pytest.raises(anthropic.APITimeoutError):
        messages_create_with_retry(sdk, max_retries=2, delay=0)
    assert sdk.messages.create.call_count == 1
