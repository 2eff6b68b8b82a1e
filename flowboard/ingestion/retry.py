"""Bounded retry with exponential backoff for network-dependent steps."""

import time
from collections.abc import Callable
from typing import TypeVar

from flowboard.logging.logger import Log

T = TypeVar("T")


def call_with_retry(
    operation: Callable[[], T],
    *,
    description: str,
    attempts: int,
    backoff_seconds: float,
    retry_on: tuple[type[Exception], ...],
    should_retry: Callable[[Exception], bool] | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run ``operation`` up to ``attempts`` times.

    Only exceptions listed in ``retry_on`` (and accepted by ``should_retry``)
    trigger another attempt; waits grow as backoff * 2 ** (attempt - 1). The
    last exception is re-raised once attempts are exhausted.
    """
    max_attempts = max(1, attempts)
    for attempt in range(1, max_attempts + 1):
        try:
            return operation()
        except retry_on as exc:
            retryable = should_retry(exc) if should_retry is not None else True
            if not retryable or attempt >= max_attempts:
                raise
            wait_seconds = backoff_seconds * 2 ** (attempt - 1)
            Log.warning(
                f"{description} failed (attempt {attempt}/{max_attempts}), "
                f"retrying in {wait_seconds:.2f}s: {exc}"
            )
            sleep(wait_seconds)
    raise RuntimeError("Retry loop exited unexpectedly")
