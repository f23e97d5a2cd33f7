"""CQRS primitives: commands, queries, handlers, mediator, dispatching."""

from __future__ import annotations

from .command import Command
from .event_dispatcher import EventDispatcher
from .handler import CommandHandler, EventHandler, QueryHandler
from .mediator import Mediator
from .outbox import OutboxPublisher, OutboxWorker
from .projection import ProjectionHandler
from .publishers import DispatchingEventPublisher, FanOutPublisher
from .query import Query
from .registry import HandlerRegistry
from .response import CommandError, CommandResult, Err, Ok, Outcome

__all__ = [
    "Command",
    "CommandError",
    "CommandHandler",
    "CommandResult",
    "DispatchingEventPublisher",
    "Err",
    "EventDispatcher",
    "EventHandler",
    "FanOutPublisher",
    "HandlerRegistry",
    "Mediator",
    "Ok",
    "Outcome",
    "OutboxPublisher",
    "OutboxWorker",
    "ProjectionHandler",
    "Query",
    "QueryHandler",
]
