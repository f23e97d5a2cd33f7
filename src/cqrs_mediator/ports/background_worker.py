"""IBackgroundWorker — lifecycle of long-running async loops."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IBackgroundWorker(Protocol):
    """Something the application starts at boot and stops at shutdown.

    ``start`` must return once the loop is scheduled (not when it finishes);
    ``stop`` must be safe to call on a worker that never started.
    Implemented by ``OutboxWorker``.
    """

    @property
    def is_running(self) -> bool: ...

    async def start(self) -> None: ...

    async def stop(self) -> None: ...
