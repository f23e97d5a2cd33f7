from datetime import datetime, timedelta, timezone

import pydantic
import pytest

from cqrs_mediator.correlation import correlation_scope
from cqrs_mediator.domain.aggregate import AggregateRoot
from cqrs_mediator.domain.entity import Entity
from cqrs_mediator.domain.events import DomainEvent, enrich_event_metadata
from cqrs_mediator.domain.value_object import ValueObject
from cqrs_mediator.primitives.exceptions import DomainError

# --- Test Models ---


class SomethingHappened(DomainEvent):
    message: str


class UserAccount(AggregateRoot[str]):
    username: str
    email: str | None = None

    def rename(self, username: str) -> None:
        self.username = username
        self.record_event(
            SomethingHappened(
                message=f"renamed to {username}",
                aggregate_id=self.id,
                aggregate_type="UserAccount",
            )
        )


class Money(ValueObject):
    amount: int
    currency: str


class Customer(Entity[int]):
    name: str


# --- DomainEvent ---


def test_domain_event_identity() -> None:
    first = SomethingHappened(message="a")
    second = SomethingHappened(message="a")

    assert first.event_id != second.event_id
    assert first.occurred_at.tzinfo is not None
    assert first.version == 1
    assert first.event_type == "SomethingHappened"


def test_domain_event_is_immutable() -> None:
    event = SomethingHappened(message="Created")

    with pytest.raises(pydantic.ValidationError):
        event.message = "Changed"  # type: ignore[misc]


def test_domain_event_tracing_defaults_to_none_outside_scope() -> None:
    event = SomethingHappened(message="x")

    assert event.correlation_id is None
    assert event.causation_id is None


def test_domain_event_picks_up_tracing_scope() -> None:
    with correlation_scope("corr-1", "cmd-1"):
        event = SomethingHappened(message="x")

    assert event.correlation_id == "corr-1"
    assert event.causation_id == "cmd-1"


def test_explicit_tracing_ids_win_over_scope() -> None:
    with correlation_scope("corr-1", "cmd-1"):
        event = SomethingHappened(message="x", correlation_id="mine")

    assert event.correlation_id == "mine"
    assert event.causation_id == "cmd-1"


def test_enrich_event_metadata_fills_missing_ids() -> None:
    event = SomethingHappened(message="x")

    enriched = enrich_event_metadata(
        event, correlation_id="corr-9", causation_id="cause-9"
    )

    assert enriched is not event
    assert enriched.correlation_id == "corr-9"
    assert enriched.causation_id == "cause-9"
    assert enriched.event_id == event.event_id
    assert event.correlation_id is None


def test_enrich_event_metadata_keeps_existing_ids() -> None:
    event = SomethingHappened(message="x", correlation_id="orig", causation_id="c")

    assert enrich_event_metadata(event, correlation_id="new") is event


# --- AggregateRoot ---


def test_aggregate_root_event_collection() -> None:
    """Events are collected in recording order and the buffer is cleared."""
    user = UserAccount(id="user-1", username="alice")

    user.rename("bob")
    user.rename("carol")

    assert user.has_events()
    assert user.event_count() == 2

    events = user.collect_events()

    assert [e.message for e in events] == ["renamed to bob", "renamed to carol"]
    assert all(e.aggregate_id == "user-1" for e in events)
    assert user.collect_events() == []
    assert not user.has_events()


def test_aggregate_root_domain_events_is_a_snapshot() -> None:
    user = UserAccount(id="user-1", username="alice")
    user.rename("bob")

    snapshot = user.domain_events
    snapshot.clear()

    assert user.event_count() == 1


def test_aggregate_root_clear_events() -> None:
    user = UserAccount(id="user-1", username="alice")
    user.rename("bob")

    user.clear_events()

    assert user.event_count() == 0


def test_aggregate_root_buffers_are_per_instance() -> None:
    alice = UserAccount(id="user-1", username="alice")
    bob = UserAccount(id="user-2", username="bob")

    alice.rename("alicia")

    assert alice.event_count() == 1
    assert bob.event_count() == 0


def test_aggregate_root_versioning() -> None:
    user = UserAccount(id="user-1", username="alice")
    assert user.version == 0

    user.increment_version()

    assert user.version == 1


def test_aggregate_equality_is_by_identity() -> None:
    assert UserAccount(id="user-1", username="alice") == UserAccount(
        id="user-1", username="bob"
    )
    assert UserAccount(id="user-1", username="alice") != UserAccount(
        id="user-2", username="alice"
    )


# --- Entity / ValueObject ---


def test_entity_equality_uses_class_and_id() -> None:
    first = Customer(id=1, name="Ada")
    renamed = Customer(id=1, name="Grace")

    class Supplier(Entity[int]):
        name: str

    assert first == renamed
    assert hash(first) == hash(renamed)
    assert first != Customer(id=2, name="Ada")
    assert first != Supplier(id=1, name="Ada")
    assert len({first, renamed}) == 1


def test_entity_repr_shows_identity() -> None:
    assert repr(Customer(id=7, name="Ada")) == "Customer(id=7)"
    assert str(Customer(id=7, name="Ada")) == "Customer(id=7)"


def test_value_object_structural_equality() -> None:
    price = Money(amount=10, currency="EUR")

    assert price == Money(amount=10, currency="EUR")
    assert hash(price) == hash(Money(amount=10, currency="EUR"))
    assert price != Money(amount=10, currency="USD")
    assert len({price, Money(amount=10, currency="EUR")}) == 1


def test_value_object_is_immutable() -> None:
    price = Money(amount=10, currency="EUR")

    with pytest.raises(pydantic.ValidationError):
        price.amount = 20  # type: ignore[misc]


# --- Audit / soft delete ---

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


def test_new_aggregate_has_no_audit_trail() -> None:
    user = UserAccount(id="user-1", username="alice")

    assert user.created_at is None
    assert user.updated_at is None
    assert user.deleted_at is None
    assert user.is_active
    assert not user.is_deleted


def test_mark_as_created_sets_created_and_updated() -> None:
    user = UserAccount(id="user-1", username="alice")

    user.mark_as_created(by="admin", at=T0)

    assert (user.created_at, user.created_by) == (T0, "admin")
    assert (user.updated_at, user.updated_by) == (T0, "admin")


def test_mark_as_updated_keeps_creation_stamp() -> None:
    user = UserAccount(id="user-1", username="alice")
    user.mark_as_created(by="admin", at=T0)

    user.mark_as_updated(by="alice", at=T0 + timedelta(hours=1))

    assert (user.created_at, user.created_by) == (T0, "admin")
    assert (user.updated_at, user.updated_by) == (T0 + timedelta(hours=1), "alice")


def test_audit_time_defaults_to_now_utc() -> None:
    user = UserAccount(id="user-1", username="alice")
    before = datetime.now(timezone.utc)

    user.mark_as_created()

    assert user.created_at is not None
    assert user.created_at >= before
    assert user.created_at.tzinfo is not None
    assert user.created_by is None


def test_soft_delete_and_restore() -> None:
    user = UserAccount(id="user-1", username="alice")
    deleted_at = T0 + timedelta(days=1)
    restored_at = T0 + timedelta(days=2)

    user.soft_delete(by="admin", at=deleted_at)

    assert user.is_deleted
    assert not user.is_active
    assert (user.deleted_at, user.deleted_by) == (deleted_at, "admin")
    assert (user.updated_at, user.updated_by) == (deleted_at, "admin")

    user.restore(by="support", at=restored_at)

    assert user.is_active
    assert user.deleted_at is None
    assert user.deleted_by is None
    assert (user.updated_at, user.updated_by) == (restored_at, "support")


def test_second_soft_delete_raises_domain_error() -> None:
    user = UserAccount(id="user-1", username="alice")
    user.soft_delete(by="admin", at=T0)

    with pytest.raises(DomainError, match="already deleted"):
        user.soft_delete(by="someone-else")

    assert user.deleted_by == "admin"
    assert user.deleted_at == T0


def test_restore_active_aggregate_raises_domain_error() -> None:
    user = UserAccount(id="user-1", username="alice")

    with pytest.raises(DomainError, match="not deleted"):
        user.restore(by="admin")

    assert user.updated_at is None
