"""OutboxMiddleware — persists a command's domain events to the outbox."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..cqrs.response import CommandResult
from ..ports.middleware import IMiddleware
from .transaction import get_current_uow

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..ports.outbox import IOutboxStorage

logger = logging.getLogger("cqrs_mediator.middleware")


class OutboxMiddleware(IMiddleware):
    """
    Middleware that saves every event of a ``CommandResult`` to the outbox.

    For every command this middleware will:
    1. Execute the rest of the pipeline
    2. Save each event from the result, in order, via ``IOutboxStorage.save``
    3. Return the result unchanged

    Events of failed commands (``Err`` outcomes) are persisted too: they are
    facts the handler chose to record.

    Place it after ``TransactionMiddleware`` so the outbox rows commit with
    the business write. *on_saved* (e.g. ``OutboxWorker.trigger``) is
    called once events were saved. With an active transaction it runs
    after commit, otherwise immediately.

    Usage::

        mediator = Mediator(
            registry,
            command_middlewares=[
                TransactionMiddleware(uow_factory),
                OutboxMiddleware(storage, on_saved=worker.trigger),
            ],
        )
    """

    def __init__(
        self,
        storage: IOutboxStorage,
        *,
        on_saved: Callable[[], None] | None = None,
    ) -> None:
        self._storage = storage
        self._on_saved = on_saved

    async def __call__(
        self,
        message: Any,
        next_handler: Callable[[Any], Awaitable[Any]],
    ) -> Any:
        """Execute the handler and save resulting events."""
        result = await next_handler(message)

        if not isinstance(result, CommandResult) or not result.events:
            return result

        for event in result.events:
            message_id = await self._storage.save(event)
            logger.debug(
                "Saved %s (event_id=%s) to outbox as %s",
                type(event).__name__,
                event.event_id,
                message_id,
            )

        if self._on_saved is not None:
            self._schedule_notification(self._on_saved)

        return result

    @staticmethod
    def _schedule_notification(callback: Callable[[], None]) -> None:
        uow = get_current_uow()
        if uow is None or not hasattr(uow, "on_commit"):
            callback()
            return

        async def _after_commit() -> None:
            callback()

        uow.on_commit(_after_commit)
