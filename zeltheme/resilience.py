"""Retry helper for network calls."""

import functools
import time
from collections.abc import Callable
from typing import ParamSpec, TypeVar

from zeltheme.logger import get_logger

logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

# Default retry configuration
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BACKOFF_FACTOR = 2.0
DEFAULT_INITIAL_DELAY = 0.5


def with_retry(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR,
    initial_delay: float = DEFAULT_INITIAL_DELAY,
    retryable_exceptions: tuple[type[Exception], ...] = (Exception,),
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator that adds exponential backoff retry to a function.

    The last exception is re-raised once every attempt has failed. Exceptions
    not listed in ``retryable_exceptions`` propagate immediately.

    Args:
        max_attempts: Maximum number of attempts (including the first one).
        backoff_factor: Factor to multiply delay by after each retry.
        initial_delay: Initial delay in seconds before first retry.
        retryable_exceptions: Tuple of exception types that should trigger a retry.

    Returns:
        Decorator function.

    Example:
        @with_retry(max_attempts=3, retryable_exceptions=(httpx.TransportError,))
        def list_remote_files():
            ...
    """
    if max_attempts < 1:
        msg = f"max_attempts must be at least 1, got {max_attempts}"
        raise ValueError(msg)

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        func_name = getattr(func, "__name__", repr(func))

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            delay = initial_delay

            for attempt in range(max_attempts):
                try:
                    result = func(*args, **kwargs)
                except retryable_exceptions as exc:
                    if attempt == max_attempts - 1:
                        logger.warning(f"{func_name} failed after {max_attempts} attempts: {exc}")
                        raise
                    logger.debug(
                        f"{func_name} failed (attempt {attempt + 1}/{max_attempts}), retrying in {delay:.1f}s: {exc}"
                    )
                    time.sleep(delay)
                    delay *= backoff_factor
                else:
                    if attempt > 0:
                        logger.debug(f"{func_name} succeeded on attempt {attempt + 1}")
                    return result

            msg = f"{func_name} failed with no exception recorded"
            raise RuntimeError(msg)  # pragma: no cover

        return wrapper

    return decorator
