"""InMemoryUnitOfWork — transaction stand-in for tests and storage-less apps."""

from __future__ import annotations

from ...ports.unit_of_work import UnitOfWork


class InMemoryUnitOfWork(UnitOfWork):
    """Records the transaction outcome instead of talking to a database.

    Pair it with ``TransactionMiddleware`` when the stores in use are not
    transactional (e.g. ``InMemoryOutboxStorage``): the pipeline shape stays
    the same as in production and ``on_commit`` hooks still fire.

    The first of ``commit`` / ``rollback`` decides the outcome; later calls
    are ignored, so a handler that rolls back explicitly is not committed
    again on scope exit.
    """

    def __init__(self) -> None:
        super().__init__()
        self.committed = False
        self.rolled_back = False
        self.commit_count = 0
        self.rollback_count = 0

    @property
    def is_finished(self) -> bool:
        return self.committed or self.rolled_back

    async def commit(self) -> None:
        if self.is_finished:
            return
        self.committed = True
        self.commit_count += 1

    async def rollback(self) -> None:
        if self.is_finished:
            return
        self.rolled_back = True
        self.rollback_count += 1


def in_memory_unit_of_work_factory() -> InMemoryUnitOfWork:
    """``uow_factory`` for ``TransactionMiddleware``: a fresh scope per command."""
    return InMemoryUnitOfWork()
