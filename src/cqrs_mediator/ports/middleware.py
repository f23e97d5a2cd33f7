"""IMiddleware — one layer of the command or query pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@runtime_checkable
class IMiddleware(Protocol):
    """A layer wrapping everything after it in the pipeline.

    ``next_handler`` runs the remaining layers and finally the handler.
    A middleware may act before and after awaiting it, replace the result,
    or skip it entirely to short-circuit the request. Whatever it returns is
    what the layer outside it sees.

    Example::

        class TimingMiddleware:
            async def __call__(self, message, next_handler):
                started = time.perf_counter()
                try:
                    return await next_handler(message)
                finally:
                    metrics.observe(type(message).__name__, time.perf_counter() - started)
    """

    async def __call__(
        self,
        message: Any,
        next_handler: Callable[[Any], Awaitable[Any]],
    ) -> Any: ...
