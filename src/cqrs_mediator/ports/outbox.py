"""IOutboxStorage — transactional outbox protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..domain.events import DomainEvent


@dataclass
class OutboxMessage:
    """A durable wrapper around one event waiting in the outbox.

    Created pending by ``IOutboxStorage.save``. ``next_attempt_at`` is a
    policy hook for retry schedulers; the outbox itself never computes it.
    """

    message_id: str
    event: DomainEvent
    retry_count: int = 0
    next_attempt_at: datetime | None = None
    published: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    published_at: datetime | None = None
    last_error: str | None = None

    @property
    def is_pending(self) -> bool:
        return not self.published

    @property
    def event_type(self) -> str:
        return type(self.event).__name__

    def is_deliverable(
        self, now: datetime | None = None, max_retries: int | None = None
    ) -> bool:
        """Pending, due at *now* and (when capped) below *max_retries* attempts."""
        if self.published:
            return False
        if now is not None and self.next_attempt_at is not None:
            if self.next_attempt_at > now:
                return False
        return max_retries is None or self.retry_count < max_retries


@runtime_checkable
class IOutboxStorage(Protocol):
    """Protocol for the transactional outbox store.

    Implementations should join the ambient transaction
    (see :func:`~cqrs_mediator.middleware.transaction.get_current_uow`) in
    ``save`` so the outbox write commits atomically with the business write.
    Concurrent publishers need claim/lock semantics from the store itself.
    """

    async def save(self, event: DomainEvent) -> str:
        """Persist *event* as a pending message and return its message id."""
        ...

    async def find_unpublished(
        self,
        limit: int = 100,
        *,
        due_at: datetime | None = None,
        max_retries: int | None = None,
    ) -> list[OutboxMessage]:
        """Return up to *limit* unpublished messages, oldest first.

        With *due_at*, messages whose ``next_attempt_at`` is later are left
        out; with *max_retries*, messages with that many failed attempts are
        left out. Excluded messages never count toward *limit*, otherwise a
        blocked head of the queue would starve everything behind it.
        """
        ...

    async def mark_as_published(self, message_id: str) -> None:
        """Mark a message as published. Marking twice is a no-op."""
        ...

    async def increment_retry_count(
        self, message_id: str, error: str | None = None
    ) -> None:
        """Record a failed delivery attempt; the message stays pending."""
        ...
