"""InMemoryOutboxStorage — list-backed outbox for tests and single-process use."""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ...ports.outbox import IOutboxStorage, OutboxMessage
from ...primitives.exceptions import OutboxError

if TYPE_CHECKING:
    from ...domain.events import DomainEvent


class InMemoryOutboxStorage(IOutboxStorage):
    """In-memory implementation of ``IOutboxStorage``.

    Stores outbox messages in insertion order; ids are ``m-1``, ``m-2``, …
    Not transactional: a rolled-back command keeps its saved messages.
    """

    def __init__(self) -> None:
        self._messages: dict[str, OutboxMessage] = {}
        self._sequence = itertools.count(1)

    async def save(self, event: DomainEvent) -> str:
        message_id = f"m-{next(self._sequence)}"
        self._messages[message_id] = OutboxMessage(message_id=message_id, event=event)
        return message_id

    async def find_unpublished(
        self,
        limit: int = 100,
        *,
        due_at: datetime | None = None,
        max_retries: int | None = None,
    ) -> list[OutboxMessage]:
        deliverable = (
            m
            for m in self._messages.values()
            if m.is_deliverable(due_at, max_retries)
        )
        return list(itertools.islice(deliverable, limit))

    async def mark_as_published(self, message_id: str) -> None:
        msg = self._get(message_id)
        if msg.published:
            return
        msg.published = True
        msg.published_at = datetime.now(timezone.utc)

    async def increment_retry_count(
        self, message_id: str, error: str | None = None
    ) -> None:
        msg = self._get(message_id)
        msg.retry_count += 1
        msg.last_error = error

    def _get(self, message_id: str) -> OutboxMessage:
        try:
            return self._messages[message_id]
        except KeyError:
            raise OutboxError(f"Unknown outbox message {message_id!r}") from None

    # ── Test helpers ─────────────────────────────────────────────

    def get(self, message_id: str) -> OutboxMessage:
        return self._get(message_id)

    def all_messages(self) -> list[OutboxMessage]:
        return list(self._messages.values())

    def clear(self) -> None:
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)
