"""Error handling for LSP feature handlers.

A failing handler must never take the language server down: exceptions are
logged with their traceback and replaced by a default result.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable[..., Any])


def wrap_handler(
    *,
    logger: logging.Logger,
    feature_name: str,
    default_factory: Callable[[], Any],
) -> Callable[[F], F]:
    """
    Decorator that shields a sync or async LSP handler from its own errors.

    Coroutine functions keep being coroutine functions, and
    asyncio.CancelledError is re-raised so request cancellation still works.

    Args:
        logger: Logger instance for error logging.
        feature_name: LSP method name, used in the log record.
        default_factory: Callable that returns the result to use on error.

    Returns:
        Decorator function.
    """

    def decorator(func: F) -> F:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    return await func(*args, **kwargs)
                except asyncio.CancelledError:
                    raise
                except Exception:
                    logger.exception("Error in %s handler", feature_name)
                    return default_factory()

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception:
                logger.exception("Error in %s handler", feature_name)
                return default_factory()

        return wrapper  # type: ignore[return-value]

    return decorator
