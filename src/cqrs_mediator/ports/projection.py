from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..domain.events import DomainEvent


@runtime_checkable
class IReadModel(Protocol):
    """Derived state kept up to date by applying domain events.

    ``apply`` must be idempotent with respect to redelivery.
    """

    def apply(self, event: DomainEvent) -> None:
        ...
