"""Resilience utilities for gateway calls with retry logic.

Provides a decorator for wrapping rule submission transport calls with
exponential backoff using tenacity. Only transport failures are retried;
a gateway that answers with a rejection is never retried.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def resilient_external_call(
    max_attempts: int = 3,
    min_wait: int = 1,
    max_wait: int = 10,
    retry_on: tuple[type[Exception], ...] = (Exception,),
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Retry decorator for synchronous external service calls.

    Wraps external calls with exponential backoff retry logic. Logs warnings
    before each retry attempt and re-raises the last error once attempts are
    exhausted.

    Args:
        max_attempts: Maximum attempts including the first call (default: 3).
        min_wait: Minimum wait time in seconds (default: 1).
        max_wait: Maximum wait time in seconds (default: 10).
        retry_on: Exception types to retry on (default: all exceptions).

    Returns:
        Callable: Decorated function with retry logic.

    Example:
        >>> @resilient_external_call(max_attempts=3, retry_on=(GatewayUnavailableError,))
        ... def post_flows(payload: dict) -> httpx.Response:
        ...     return client.post("/flows", json=payload)
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(retry_on),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


__all__ = ["resilient_external_call"]
