"""Retry Anthropic API calls on overload (529) and rate limit (429).

QC runs inside an unattended loop, so waits are short and fixed: a bounded
number of retries after LLM_RETRY_DELAY seconds each. Timeouts are not in
RETRYABLE and fail on the first attempt.
"""

import time

import anthropic
from anthropic._exceptions import OverloadedError, RateLimitError

from report_qc.config import LLM_MAX_RETRIES, LLM_RETRY_DELAY

# OverloadedError is not re-exported from anthropic in some SDK versions
RETRYABLE = (OverloadedError, RateLimitError)


def messages_create_with_retry(
    client: anthropic.Anthropic,
    max_retries: int = LLM_MAX_RETRIES,
    delay: float = LLM_RETRY_DELAY,
    **kwargs,
):
    """Call client.messages.create(**kwargs), retrying overload/rate-limit errors."""
    attempts = max_retries + 1
    for attempt in range(attempts):
        try:
            return client.messages.create(**kwargs)
        except RETRYABLE as e:
            if attempt == attempts - 1:
                raise
            kind = type(e).__name__
            print(f"  .. API {kind}, retrying in {delay:g}s (attempt {attempt + 1}/{attempts})...")
            time.sleep(delay)
    raise RuntimeError("retry loop exited without return or raise")
