"""ProjectionHandler — event handler that feeds a read model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..domain.events import DomainEvent
from .handler import EventHandler

if TYPE_CHECKING:
    from ..ports.projection import IReadModel


class ProjectionHandler(EventHandler[DomainEvent]):
    """Applies every event it receives to an ``IReadModel``.

    Register one instance for each event type the read model cares about::

        handler = ProjectionHandler(account_read_model)
        for event_type in (AccountOpened, MoneyDeposited, MoneyWithdrawn):
            dispatcher.register(event_type, handler)
    """

    def __init__(self, read_model: IReadModel) -> None:
        self.read_model = read_model

    async def handle(self, event: DomainEvent) -> None:
        self.read_model.apply(event)
