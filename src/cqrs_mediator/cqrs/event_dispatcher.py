"""EventDispatcher — in-process fan-out of domain events to projections."""

from __future__ import annotations

import logging
from inspect import isawaitable
from typing import (
    TYPE_CHECKING,
    Generic,
    TypeVar,
    cast,
)

from ..domain.events import DomainEvent

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..ports.event_dispatcher import EventHandler

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=DomainEvent)


class EventDispatcher(Generic[E]):
    """Local execution engine for domain events.

    Holds handler **instances** (objects with ``handle(event)`` or plain
    callables, sync or async) keyed by exact event type.

    - Registration is 1:N and accumulates; nothing is ever overwritten.
    - Dispatch matches the event's exact runtime type only. A handler
      registered for a base event class is not invoked for subclasses.
    - Handlers run sequentially in registration order. The first failing
      handler aborts the dispatch of that event and its exception propagates
      to the caller.

    **Architectural Role**:
    - In the **pipeline**: used by ``EventDispatchingMiddleware`` to update
      read models synchronously.
    - Behind the **outbox**: fed by ``DispatchingEventPublisher`` or an
      external consumer with delivered events. Delivery is at-least-once, so
      handlers should be idempotent.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[E], list[EventHandler[E]]] = {}

    # ── Registration ─────────────────────────────────────────────

    def register(
        self,
        event_type: type[E],
        handler: EventHandler[E],
    ) -> None:
        """Append a handler for a specific event type."""
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(
            "Registered event handler %s -> %s",
            event_type.__name__,
            type(handler).__name__,
        )

    # ── Dispatching ──────────────────────────────────────────────

    async def dispatch(self, event: DomainEvent) -> None:
        """Invoke every handler registered for ``type(event)``, in order."""
        handlers = self._handlers.get(cast("type[E]", type(event)))
        if not handlers:
            return
        for handler in list(handlers):
            await self._invoke(handler, event)

    async def dispatch_all(self, events: Sequence[DomainEvent]) -> None:
        """Dispatch *events* in order, stopping at the first failure."""
        for event in events:
            await self.dispatch(event)

    async def _invoke(self, handler: EventHandler[E], event: DomainEvent) -> None:
        try:
            if hasattr(handler, "handle"):
                result = handler.handle(cast("E", event))
            elif callable(handler):
                result = handler(cast("E", event))
            else:
                raise TypeError("Handler must be a callable or have a handle() method")

            if isawaitable(result):
                await result
        except Exception:
            logger.exception(
                "Error executing handler %s for event %s (event_id=%s)",
                type(handler).__name__,
                type(event).__name__,
                event.event_id,
            )
            raise

    # ── Introspection ────────────────────────────────────────────

    def get_registered_handlers(self) -> dict[type[E], list[EventHandler[E]]]:
        """Return all registered handlers (debugging utility)."""
        return {k: list(v) for k, v in self._handlers.items()}

    def clear(self) -> None:
        """Remove all handler registrations (testing utility)."""
        self._handlers.clear()
