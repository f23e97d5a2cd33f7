"""Result envelope returned by command handlers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Generic, TypeVar, Union

from ..primitives.exceptions import UnwrapError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..domain.events import DomainEvent

T = TypeVar("T")


@dataclass(frozen=True)
class CommandError:
    """Base class for typed business errors.

    Subclass it (as a frozen dataclass) for each expected failure, e.g.
    ``InsufficientFunds``. Business errors travel as values, never raised.
    """

    message: str = ""


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the command's value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying a business error."""

    error: CommandError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def unwrap(self) -> object:
        raise UnwrapError(f"Called unwrap() on an Err outcome: {self.error!r}")

    def unwrap_or(self, default: T) -> T:
        return default


Outcome = Union[Ok[T], Err]


@dataclass(frozen=True)
class CommandResult(Generic[T]):
    """Wrapper returned by command handlers.

    Pairs the outcome with the domain events recorded while handling the
    command. Event order is the order the handler recorded them and is kept
    by every middleware and by the outbox.
    """

    outcome: Outcome[T]
    events: tuple[DomainEvent, ...] = field(default_factory=tuple)
    correlation_id: str | None = None
    causation_id: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.events, tuple):
            object.__setattr__(self, "events", tuple(self.events))

    # ── Factory methods ──────────────────────────────────────────

    @classmethod
    def ok(
        cls, value: T, events: Iterable[DomainEvent] = ()
    ) -> CommandResult[T]:
        return cls(outcome=Ok(value), events=tuple(events))

    @classmethod
    def fail(
        cls, error: CommandError, events: Iterable[DomainEvent] = ()
    ) -> CommandResult[T]:
        return cls(outcome=Err(error), events=tuple(events))

    # ── Accessors ────────────────────────────────────────────────

    @property
    def is_success(self) -> bool:
        return isinstance(self.outcome, Ok)

    @property
    def value(self) -> T:
        """The success value; raises ``UnwrapError`` for a business error."""
        if isinstance(self.outcome, Ok):
            return self.outcome.value
        raise UnwrapError(
            f"Command failed with business error: {self.outcome.error!r}"
        )

    @property
    def error(self) -> CommandError | None:
        if isinstance(self.outcome, Err):
            return self.outcome.error
        return None

    def with_events(self, *extra: DomainEvent) -> CommandResult[T]:
        """Return a copy with *extra* appended after the existing events."""
        return replace(self, events=(*self.events, *extra))
