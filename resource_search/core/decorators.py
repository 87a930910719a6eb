"""Decorators for the resource search engine."""

import functools
import traceback
import uuid
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import ParamSpec, TypeVar

from .logging import logger, request_id_ctx

P = ParamSpec("P")
R = TypeVar("R")


def track_request(
    operation_name: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Decorator to track search requests with timing and error handling.

    Errors are logged and re-raised unchanged.

    Args:
        operation_name: Name of the operation being tracked

    Returns:
        Decorated function with request tracking
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            request_id = str(uuid.uuid4())[:8]
            start_time = datetime.now(UTC).timestamp()

            token = request_id_ctx.set(request_id)

            logger.info("Starting %s request", operation_name)

            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                duration = datetime.now(UTC).timestamp() - start_time
                logger.error("Failed %s after %.2fs: %s", operation_name, duration, str(e))
                logger.debug("Traceback: %s", traceback.format_exc())
                raise
            else:
                duration = datetime.now(UTC).timestamp() - start_time
                logger.info("Completed %s in %.2fs", operation_name, duration)
            finally:
                request_id_ctx.reset(token)

            return result

        return wrapper

    return decorator
