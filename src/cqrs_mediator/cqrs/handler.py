"""Handler base classes for commands, queries and events."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from .response import CommandResult

TResult = TypeVar("TResult")
E = TypeVar("E")


class CommandHandler(ABC, Generic[TResult]):
    """Handles one command type and reports the outcome as a value.

    Expected failures are returned with ``CommandResult.fail``; raise only
    for faults, which roll back the transaction and reach the caller. Events
    recorded on aggregates go into the result in recording order::

        class DepositHandler(CommandHandler[int]):
            async def handle(self, command: DepositMoney) -> CommandResult[int]:
                account = self._accounts[command.account_id]
                account.deposit(command.amount)
                return CommandResult.ok(account.balance, account.collect_events())
    """

    @abstractmethod
    async def handle(self, command: Any) -> CommandResult[TResult]: ...


class QueryHandler(ABC, Generic[TResult]):
    """Handles one query type; the return value goes straight to the caller."""

    @abstractmethod
    async def handle(self, query: Any) -> TResult: ...


class EventHandler(ABC, Generic[E]):
    """Reacts to a domain event, typically by updating a projection.

    One event type may have any number of handlers. They run one after the
    other and a raised exception stops the rest, so keep them idempotent:
    the outbox redelivers after a failure.
    """

    @abstractmethod
    async def handle(self, event: E) -> None: ...
