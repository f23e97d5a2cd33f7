"""ICommandBus / IQueryBus — the application-facing side of the mediator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..cqrs.response import CommandResult


@runtime_checkable
class ICommandBus(Protocol):
    """Sends a command to its single handler.

    Business failures come back inside the ``CommandResult``; an unregistered
    command type raises ``HandlerNotFoundError``.
    """

    async def send(self, command: Any) -> CommandResult[Any]: ...


@runtime_checkable
class IQueryBus(Protocol):
    """Asks a query of its single handler and returns the answer."""

    async def ask(self, query: Any) -> Any: ...
