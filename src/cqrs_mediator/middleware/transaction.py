"""TransactionMiddleware — runs the rest of the pipeline inside a UnitOfWork."""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from ..ports.middleware import IMiddleware

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..ports.unit_of_work import UnitOfWork

logger = logging.getLogger("cqrs_mediator.middleware")

#: ContextVar tracking the current UoW. ``None`` means we are not inside
#: any transaction scope yet (the next command opens one).
_current_uow: ContextVar[Any] = ContextVar("current_uow", default=None)


def get_current_uow() -> Any:
    """Return the active UoW (or *None* if outside a transaction scope)."""
    return _current_uow.get()


class TransactionMiddleware(IMiddleware):
    """Transaction boundary around the continuation.

    Middleware placed after this one (notably ``OutboxMiddleware``) runs
    inside the same transaction. The Mediator refuses a pipeline where the
    outbox middleware comes first.

    **Nested commands:** a command sent from inside another command's
    handler joins the outer transaction instead of opening a second one.

    Business errors are returned as ``Err`` outcomes, not raised, so they
    commit like any other result; only exceptions roll back.

    Usage::

        mediator = Mediator(
            registry,
            command_middlewares=[
                TransactionMiddleware(uow_factory),
                OutboxMiddleware(outbox_storage),
            ],
        )
    """

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def __call__(
        self,
        message: Any,
        next_handler: Callable[[Any], Awaitable[Any]],
    ) -> Any:
        if _current_uow.get() is not None:
            # Nested command: reuse parent UoW
            return await next_handler(message)

        async with self._uow_factory() as uow:
            token = _current_uow.set(uow)
            try:
                result = await next_handler(message)
            finally:
                _current_uow.reset(token)
        logger.debug("Transaction for %s committed", type(message).__name__)
        return result
