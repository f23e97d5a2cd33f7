"""FanOutPublisher — deliver each event to several sinks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...ports.messaging import IEventPublisher

if TYPE_CHECKING:
    from ...domain.events import DomainEvent

logger = logging.getLogger("cqrs_mediator.publishers")


class FanOutPublisher(IEventPublisher):
    """Publishes an event to every configured publisher, in order.

    The first failing sink aborts the fan-out and its exception propagates,
    so the outbox counts the whole delivery as failed and retries it later.
    Sinks therefore see the event at least once.

    Usage::

        publisher = FanOutPublisher(broker_publisher, webhook_publisher)
        OutboxPublisher(storage, publisher)
    """

    def __init__(self, *publishers: IEventPublisher) -> None:
        self._publishers: list[IEventPublisher] = list(publishers)

    def add(self, publisher: IEventPublisher) -> None:
        self._publishers.append(publisher)

    async def publish(self, event: DomainEvent) -> None:
        for publisher in self._publishers:
            logger.debug(
                "Publishing %s via %s", type(event).__name__, type(publisher).__name__
            )
            await publisher.publish(event)
