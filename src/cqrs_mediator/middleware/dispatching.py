"""EventDispatchingMiddleware — synchronous in-process projection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..cqrs.response import CommandResult
from ..ports.middleware import IMiddleware

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..ports.event_dispatcher import IEventDispatcher


class EventDispatchingMiddleware(IMiddleware):
    """Feeds a command's events to an ``EventDispatcher`` before returning.

    Handy for read models that must be consistent with the command
    immediately. A projection fault propagates to the caller of ``send``.
    """

    def __init__(self, dispatcher: IEventDispatcher[Any]) -> None:
        self._dispatcher = dispatcher

    async def __call__(
        self,
        message: Any,
        next_handler: Callable[[Any], Awaitable[Any]],
    ) -> Any:
        result = await next_handler(message)
        if isinstance(result, CommandResult):
            await self._dispatcher.dispatch_all(result.events)
        return result
