"""DomainEvent — immutable record of something that happened to an aggregate."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from ..correlation import get_causation_id, get_correlation_id


def _new_event_id() -> str:
    return str(uuid.uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DomainEvent(BaseModel):
    """Base class for domain events.

    Subclasses add the payload as fields and usually pin ``aggregate_type``::

        class MoneyDeposited(DomainEvent):
            aggregate_type: str | None = "Account"
            amount: int
            new_balance: int

    ``version`` is the event's schema version, not the aggregate version.
    The tracing ids default to the request being handled, so an event
    recorded during ``Mediator.send`` points back at its command.
    """

    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=_new_event_id)
    occurred_at: datetime = Field(default_factory=_utc_now)
    version: int = 1
    aggregate_id: str | None = None
    aggregate_type: str | None = None
    correlation_id: str | None = Field(default_factory=get_correlation_id)
    causation_id: str | None = Field(default_factory=get_causation_id)
    metadata: dict[str, object] = Field(default_factory=dict)

    @property
    def event_type(self) -> str:
        return type(self).__name__


def enrich_event_metadata(
    event: DomainEvent,
    *,
    correlation_id: str | None = None,
    causation_id: str | None = None,
) -> DomainEvent:
    """Fill in tracing ids the event does not carry yet.

    Ids already present are kept. Returns *event* itself when nothing
    changes, otherwise a copy.
    """
    missing: dict[str, str] = {}
    if correlation_id and not event.correlation_id:
        missing["correlation_id"] = correlation_id
    if causation_id and not event.causation_id:
        missing["causation_id"] = causation_id
    return event.model_copy(update=missing) if missing else event
