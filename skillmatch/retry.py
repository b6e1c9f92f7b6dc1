"""Retry decorator with exponential backoff for pool-source HTTP calls."""
from __future__ import annotations

import functools
import random
import time
from typing import Any, Callable, Tuple, Type

from skillmatch.log import get_logger

log = get_logger(__name__)


def _never(exc: BaseException) -> bool:
    return False


def retry(
    *,
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 20.0,
    backoff_factor: float = 2.0,
    jitter: bool = True,
    retryable: Tuple[Type[BaseException], ...] = (Exception,),
    giveup: Callable[[BaseException], bool] = _never,
    sleep: Callable[[float], None] = time.sleep,
) -> Callable:
    """Retry the wrapped call on *retryable* errors with exponential backoff.

    ``giveup(exc)`` returning True re-raises immediately, e.g. for HTTP 4xx
    responses that will not succeed on a second attempt. ``sleep`` is
    injectable so tests don't wait.
    """

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            attempt = 0
            while True:
                attempt += 1
                try:
                    return fn(*args, **kwargs)
                except retryable as exc:
                    if giveup(exc):
                        log.debug("%s: not retrying (%s)", fn.__qualname__, exc)
                        raise
                    if attempt >= max_attempts:
                        log.error(
                            "%s failed after %d attempts: %s",
                            fn.__qualname__, max_attempts, exc,
                        )
                        raise
                    delay = min(base_delay * (backoff_factor ** (attempt - 1)), max_delay)
                    if jitter:
                        delay *= 0.5 + random.random()
                    log.warning(
                        "%s attempt %d/%d failed (%s), retrying in %.1fs",
                        fn.__qualname__, attempt, max_attempts, exc, delay,
                    )
                    sleep(delay)

        return wrapper

    return decorator
