from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..domain.events import DomainEvent


@runtime_checkable
class IEventPublisher(Protocol):
    """
    Port for delivering a domain event out of the outbox.

    Infrastructure code provides concrete adapters (message broker, webhook,
    in-process dispatcher, …). Raising from ``publish`` marks the delivery
    attempt as failed.
    """

    async def publish(self, event: DomainEvent) -> None:
        """Deliver *event* to the transport."""
        ...
