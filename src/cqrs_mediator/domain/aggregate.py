"""Aggregate Root base class with Generic ID support."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Generic, cast

from pydantic import PrivateAttr

from ..primitives.exceptions import DomainError
from .entity import ID, Entity

if TYPE_CHECKING:
    from .events import DomainEvent

__all__ = ["ID", "AggregateRoot"]


def _now(at: datetime | None) -> datetime:
    return at if at is not None else datetime.now(timezone.utc)


class AggregateRoot(Entity[ID], Generic[ID]):
    """Base class for all Aggregate Roots.

    Generic over ``ID`` to support UUID, int, or str primary keys.
    Buffers the domain events recorded by business methods until the command
    handler collects them into its ``CommandResult``.

    Carries audit fields (``created_*``, ``updated_*``) and a soft-delete
    lifecycle (``deleted_*``). Deleting twice, or restoring an aggregate
    that is not deleted, raises :class:`DomainError`.

    The buffer is owned by the instance and is not thread-safe; sharing one
    aggregate across concurrent commands needs external synchronization.

    Usage::

        class Account(AggregateRoot[str]):
            balance: int = 0

            def deposit(self, amount: int) -> None:
                self.balance += amount
                self.record_event(MoneyDeposited(...))

        events = account.collect_events()
    """

    created_at: datetime | None = None
    created_by: str | None = None
    updated_at: datetime | None = None
    updated_by: str | None = None
    deleted_at: datetime | None = None
    deleted_by: str | None = None

    _version: int = PrivateAttr(default=0)
    _domain_events: list[DomainEvent] = PrivateAttr(
        default_factory=lambda: cast("list[DomainEvent]", [])
    )

    # ── Events ───────────────────────────────────────────────────

    def record_event(self, event: DomainEvent) -> None:
        """Record a domain event to be handed to the command result."""
        self._domain_events.append(event)

    @property
    def domain_events(self) -> list[DomainEvent]:
        """Snapshot of the pending events, in recording order."""
        return list(self._domain_events)

    def collect_events(self) -> list[DomainEvent]:
        """Return all recorded events and clear the internal list."""
        events = list(self._domain_events)
        self._domain_events.clear()
        return events

    def clear_events(self) -> None:
        self._domain_events.clear()

    def has_events(self) -> bool:
        return bool(self._domain_events)

    def event_count(self) -> int:
        return len(self._domain_events)

    # ── Version ──────────────────────────────────────────────────

    @property
    def version(self) -> int:
        """Read-only version, managed by the persistence layer."""
        return self._version

    def increment_version(self) -> None:
        self._version += 1

    # ── Audit / soft delete ──────────────────────────────────────

    def mark_as_created(
        self, by: str | None = None, at: datetime | None = None
    ) -> None:
        """Stamp creation; ``updated_*`` starts out equal to ``created_*``."""
        at = _now(at)
        self.created_at = at
        self.created_by = by
        self.updated_at = at
        self.updated_by = by

    def mark_as_updated(
        self, by: str | None = None, at: datetime | None = None
    ) -> None:
        self.updated_at = _now(at)
        self.updated_by = by

    def soft_delete(self, by: str | None = None, at: datetime | None = None) -> None:
        """Mark as deleted. Raises if already deleted."""
        if self.is_deleted:
            raise DomainError(f"{type(self).__name__} {self.id!r} is already deleted")
        at = _now(at)
        self.deleted_at = at
        self.deleted_by = by
        self.mark_as_updated(by, at)

    def restore(self, by: str | None = None, at: datetime | None = None) -> None:
        """Clear the deletion. Raises if not deleted."""
        if not self.is_deleted:
            raise DomainError(f"{type(self).__name__} {self.id!r} is not deleted")
        self.deleted_at = None
        self.deleted_by = None
        self.mark_as_updated(by, at)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_active(self) -> bool:
        return not self.is_deleted
