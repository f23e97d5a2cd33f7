"""Middleware components."""

from .definition import MiddlewareDefinition
from .dispatching import EventDispatchingMiddleware
from .logging import LoggingMiddleware
from .outbox import OutboxMiddleware
from .pipeline import build_pipeline
from .registry import MiddlewareRegistry
from .transaction import TransactionMiddleware, get_current_uow

__all__ = [
    "EventDispatchingMiddleware",
    "LoggingMiddleware",
    "MiddlewareDefinition",
    "MiddlewareRegistry",
    "OutboxMiddleware",
    "TransactionMiddleware",
    "build_pipeline",
    "get_current_uow",
]
