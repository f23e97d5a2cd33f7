"""DispatchingEventPublisher — deliver outbox events to the local dispatcher."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ...ports.messaging import IEventPublisher

if TYPE_CHECKING:
    from ...domain.events import DomainEvent
    from ...ports.event_dispatcher import IEventDispatcher


class DispatchingEventPublisher(IEventPublisher):
    """Bridges the outbox to an in-process ``EventDispatcher``.

    Lets a single process keep projections up to date from the outbox
    without a broker. A projection fault fails the delivery attempt and the
    message is retried on the next pass.

    Usage::

        dispatcher = EventDispatcher()
        dispatcher.register(AccountOpened, ProjectionHandler(read_model))
        OutboxPublisher(storage, DispatchingEventPublisher(dispatcher))
    """

    def __init__(self, dispatcher: IEventDispatcher[Any]) -> None:
        self._dispatcher = dispatcher

    async def publish(self, event: DomainEvent) -> None:
        await self._dispatcher.dispatch(event)
