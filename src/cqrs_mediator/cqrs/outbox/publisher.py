"""OutboxPublisher — pull-based delivery of pending outbox messages."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ...primitives.exceptions import OutboxError

if TYPE_CHECKING:
    from ...ports.messaging import IEventPublisher
    from ...ports.outbox import IOutboxStorage, OutboxMessage

logger = logging.getLogger("cqrs_mediator.outbox")

DEFAULT_BATCH_SIZE = 100


class OutboxPublisher:
    """
    Delivers pending outbox messages through an ``IEventPublisher``.

    Lifecycle per pass:
    1. Fetch up to ``batch_size`` deliverable messages, oldest first.
    2. Publish each one, in sequence.
    3. On success mark it published; on failure increment its retry count
       and move on. One failure never aborts the batch.

    A failed message is retried on a later pass only. There is no backoff
    and no dead-letter path; two optional policy hooks are honoured by the
    store query, so blocked messages never take a slot in the batch:

    - messages whose ``next_attempt_at`` lies in the future are not fetched;
    - with ``max_retries`` set, messages that reached the cap stay pending
      but are no longer fetched. Reaching the cap is logged once.

    Concurrent passes against the same store can pick overlapping batches
    unless the store implements claim/lock semantics.
    """

    def __init__(
        self,
        storage: IOutboxStorage,
        publisher: IEventPublisher,
        *,
        max_retries: int | None = None,
    ) -> None:
        if max_retries is not None and max_retries < 1:
            raise OutboxError("max_retries must be a positive integer or None")
        self.storage = storage
        self.publisher = publisher
        self.max_retries = max_retries

    async def publish_pending_events(self, batch_size: int = DEFAULT_BATCH_SIZE) -> int:
        """
        Publish up to *batch_size* pending messages in one pass.

        Returns the number of messages successfully published.
        """
        if batch_size < 1:
            raise OutboxError(f"batch_size must be >= 1, got {batch_size}")

        now = datetime.now(timezone.utc)
        messages: list[OutboxMessage] = await self.storage.find_unpublished(
            batch_size, due_at=now, max_retries=self.max_retries
        )
        if not messages:
            return 0

        published = 0
        failed = 0
        for msg in messages:
            # Stores are expected to filter; this keeps a lax store from
            # re-sending capped or not-yet-due messages.
            if not msg.is_deliverable(now, self.max_retries):
                continue
            try:
                await self.publisher.publish(msg.event)
                await self.storage.mark_as_published(msg.message_id)
            except Exception as exc:  # noqa: BLE001
                failed += 1
                await self._record_failure(msg, exc)
                continue
            published += 1

        logger.debug(
            "Outbox pass finished: %d fetched, %d published, %d failed",
            len(messages),
            published,
            failed,
        )
        return published

    async def _record_failure(self, msg: OutboxMessage, exc: Exception) -> None:
        attempt = msg.retry_count + 1
        logger.error(
            "Failed to publish outbox message %s (%s, attempt %d): %s",
            msg.message_id,
            msg.event_type,
            attempt,
            exc,
        )
        try:
            await self.storage.increment_retry_count(msg.message_id, str(exc))
        except Exception:
            # The message stays pending with its old count; the next pass
            # retries it like any other failure.
            logger.exception(
                "Could not record failed attempt for outbox message %s",
                msg.message_id,
            )
            return
        if self.max_retries is not None and attempt >= self.max_retries:
            logger.warning(
                "Outbox message %s reached max retries (%d); it will not be "
                "attempted again",
                msg.message_id,
                self.max_retries,
            )
