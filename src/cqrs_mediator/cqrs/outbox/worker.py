"""OutboxWorker — background loop driving the OutboxPublisher."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

from ...ports.background_worker import IBackgroundWorker
from ...primitives.exceptions import OutboxError
from .publisher import DEFAULT_BATCH_SIZE

if TYPE_CHECKING:
    from .publisher import OutboxPublisher

logger = logging.getLogger("cqrs_mediator.outbox")


class OutboxWorker(IBackgroundWorker):
    """
    Runs ``publish_pending_events`` on a schedule or when triggered.

    - Polls every ``poll_interval`` seconds.
    - ``trigger()`` wakes the loop early; pass it as ``on_saved`` to
      ``OutboxMiddleware`` to publish right after a command commits.
    - A full batch schedules an immediate follow-up pass.

    Usage::

        worker = OutboxWorker(OutboxPublisher(storage, broker), poll_interval=2.0)
        await worker.start()
        ...
        await worker.stop()
    """

    def __init__(
        self,
        outbox_publisher: OutboxPublisher,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        poll_interval: float = 5.0,
        error_delay: float = 1.0,
    ) -> None:
        if batch_size < 1:
            raise OutboxError(f"batch_size must be >= 1, got {batch_size}")
        if poll_interval <= 0:
            raise OutboxError(f"poll_interval must be > 0, got {poll_interval}")
        self._publisher = outbox_publisher
        self.batch_size = batch_size
        self.poll_interval = poll_interval
        self.error_delay = error_delay

        self._running = False
        self._task: asyncio.Task[None] | None = None
        self._trigger_event = asyncio.Event()

    @property
    def is_running(self) -> bool:
        return self._running

    def trigger(self) -> None:
        """Wake up the background loop to process messages."""
        self._trigger_event.set()

    async def run_once(self) -> int:
        """Run a single publish pass (also usable from a cron-style job)."""
        return await self._publisher.publish_pending_events(self.batch_size)

    # ── Worker Lifecycle ─────────────────────────────────────────────

    async def start(self) -> None:
        """Start the background processing loop."""
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info(
            "OutboxWorker started (batch: %d, poll: %.1fs)",
            self.batch_size,
            self.poll_interval,
        )

    async def stop(self) -> None:
        """Stop the background loop gracefully."""
        self._running = False
        self.trigger()
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        logger.info("OutboxWorker stopped")

    # ── Internal loop ────────────────────────────────────────────────

    async def _run_loop(self) -> None:
        # Initial drain picks up messages left over from a previous process.
        self.trigger()
        while self._running:
            try:
                with contextlib.suppress(asyncio.TimeoutError):
                    await asyncio.wait_for(
                        self._trigger_event.wait(), timeout=self.poll_interval
                    )
                self._trigger_event.clear()
                if not self._running:
                    break

                published = await self.run_once()

                if published >= self.batch_size:
                    self.trigger()
            except Exception as exc:
                logger.error("OutboxWorker loop error: %s", exc, exc_info=True)
                await asyncio.sleep(self.error_delay)
