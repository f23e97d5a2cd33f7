"""IEventDispatcher — in-process delivery of domain events to handlers."""

from __future__ import annotations

from collections.abc import Awaitable
from typing import (
    TYPE_CHECKING,
    Generic,
    Protocol,
    TypeVar,
    Union,
    runtime_checkable,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..domain.events import DomainEvent

E = TypeVar("E", bound="DomainEvent")
E_contra = TypeVar("E_contra", bound="DomainEvent", contravariant=True)


class HasHandle(Protocol[E_contra]):
    """An object exposing ``handle(event)``, sync or async."""

    def handle(self, event: E_contra) -> Awaitable[None] | None: ...


class EventCallback(Protocol[E_contra]):
    """A bare function taking the event, sync or async."""

    def __call__(self, event: E_contra) -> Awaitable[None] | None: ...


#: Anything the dispatcher accepts as a handler.
EventHandler = Union[EventCallback[E], HasHandle[E]]


@runtime_checkable
class IEventDispatcher(Protocol, Generic[E]):
    """Routes each event to the handlers registered for its exact type.

    Registration accumulates (1:N). Dispatch is sequential in registration
    order and stops at the first handler that raises.
    """

    def register(self, event_type: type[E], handler: EventHandler[E]) -> None: ...

    async def dispatch(self, event: DomainEvent) -> None: ...

    async def dispatch_all(self, events: Sequence[DomainEvent]) -> None: ...

    def clear(self) -> None: ...
