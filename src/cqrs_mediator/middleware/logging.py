"""LoggingMiddleware — one log line per request start and outcome."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from ..cqrs.response import CommandResult
from ..ports.middleware import IMiddleware

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger("cqrs_mediator.middleware")


class LoggingMiddleware(IMiddleware):
    """Logs each command or query with its correlation id and duration.

    Outcomes are logged at INFO (``completed`` / ``rejected`` with the
    business error type); exceptions are logged with traceback and
    re-raised. Put it first in the list so the timing covers every other
    layer.
    """

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    async def __call__(
        self,
        message: Any,
        next_handler: Callable[[Any], Awaitable[Any]],
    ) -> Any:
        name = type(message).__name__
        logger.log(
            self.level,
            "Handling %s (correlation_id=%s)",
            name,
            getattr(message, "correlation_id", None),
        )
        started = time.perf_counter()
        try:
            result = await next_handler(message)
        except Exception:
            logger.exception("%s failed after %.2fms", name, _elapsed_ms(started))
            raise

        if isinstance(result, CommandResult) and result.error is not None:
            logger.log(
                self.level,
                "%s rejected in %.2fms: %s",
                name,
                _elapsed_ms(started),
                type(result.error).__name__,
            )
        else:
            logger.log(
                self.level, "%s completed in %.2fms", name, _elapsed_ms(started)
            )
        return result


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000
