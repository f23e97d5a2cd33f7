"""UnitOfWork — the transaction a command runs in."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger("cqrs_mediator.uow")


class UnitOfWork(ABC):
    """Async context manager around one business transaction.

    ``TransactionMiddleware`` enters it for each top-level command. Leaving
    the block normally commits, even when the command returned a business
    ``Err``; leaving it with an exception rolls back. Stores that must write
    atomically with the business change (the outbox above all) look it up via
    ``get_current_uow()`` and enlist their writes.

    Callbacks registered with :meth:`on_commit` run once the commit has
    succeeded and are discarded on rollback::

        class SessionUnitOfWork(UnitOfWork):
            def __init__(self, session):
                super().__init__()
                self.session = session

            async def commit(self):
                await self.session.commit()

            async def rollback(self):
                await self.session.rollback()
    """

    def __init__(self) -> None:
        self._after_commit: list[Callable[[], Awaitable[Any]]] = []

    def on_commit(self, callback: Callable[[], Awaitable[Any]]) -> None:
        """Run *callback* after a successful commit."""
        self._after_commit.append(callback)

    async def trigger_commit_hooks(self) -> None:
        """Run and forget the pending after-commit callbacks.

        The data is already committed, so a failing callback is logged and
        the remaining ones still run.
        """
        callbacks, self._after_commit = self._after_commit, []
        for callback in callbacks:
            try:
                await callback()
            except Exception:
                logger.exception("Error in on_commit hook %r", callback)

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...

    async def __aenter__(self) -> UnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if exc_type is not None:
            self._after_commit.clear()
            await self.rollback()
            return
        await self.commit()
        await self.trigger_commit_hooks()
