"""cqrs-mediator — mediator pipeline, transactional outbox and event dispatch.

Zero infrastructure dependencies: storage, transactions and brokers are
plugged in through the protocols in :mod:`cqrs_mediator.ports`.
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters.memory import (
    InMemoryOutboxStorage,
    InMemoryUnitOfWork,
    in_memory_unit_of_work_factory,
)
from .correlation import (
    correlation_scope,
    generate_correlation_id,
    get_causation_id,
    get_context_vars,
    get_correlation_id,
    set_causation_id,
    set_correlation_id,
)

# ── CQRS ─────────────────────────────────────────────────────────
from .cqrs import (
    Command,
    CommandError,
    CommandHandler,
    CommandResult,
    DispatchingEventPublisher,
    Err,
    EventDispatcher,
    EventHandler,
    FanOutPublisher,
    HandlerRegistry,
    Mediator,
    Ok,
    Outcome,
    OutboxPublisher,
    OutboxWorker,
    ProjectionHandler,
    Query,
    QueryHandler,
)

# ── Domain ───────────────────────────────────────────────────────
from .domain import (
    AggregateRoot,
    DomainEvent,
    Entity,
    ValueObject,
    enrich_event_metadata,
)

# ── Middleware ───────────────────────────────────────────────────
from .middleware import (
    EventDispatchingMiddleware,
    LoggingMiddleware,
    MiddlewareDefinition,
    MiddlewareRegistry,
    OutboxMiddleware,
    TransactionMiddleware,
    build_pipeline,
    get_current_uow,
)

# ── Ports ────────────────────────────────────────────────────────
from .ports import (
    IBackgroundWorker,
    ICommandBus,
    IEventDispatcher,
    IEventPublisher,
    IMiddleware,
    IOutboxStorage,
    IQueryBus,
    IReadModel,
    OutboxMessage,
    UnitOfWork,
)

# ── Primitives ──────────────────────────────────────────────────
from .primitives import (
    CQRSMediatorError,
    DomainError,
    HandlerError,
    HandlerNotFoundError,
    HandlerRegistrationError,
    MediatorConfigurationError,
    OutboxError,
    UnwrapError,
)

__all__: list[str] = [
    # Domain
    "AggregateRoot",
    "DomainEvent",
    "Entity",
    "ValueObject",
    "enrich_event_metadata",
    # CQRS
    "Command",
    "CommandError",
    "CommandHandler",
    "CommandResult",
    "Err",
    "EventDispatcher",
    "EventHandler",
    "HandlerRegistry",
    "Mediator",
    "Ok",
    "Outcome",
    "ProjectionHandler",
    "Query",
    "QueryHandler",
    "correlation_scope",
    "generate_correlation_id",
    "get_causation_id",
    "get_context_vars",
    "get_correlation_id",
    "set_causation_id",
    "set_correlation_id",
    # Outbox
    "DispatchingEventPublisher",
    "FanOutPublisher",
    "OutboxPublisher",
    "OutboxWorker",
    # Ports
    "IBackgroundWorker",
    "ICommandBus",
    "IEventDispatcher",
    "IEventPublisher",
    "IMiddleware",
    "IOutboxStorage",
    "IQueryBus",
    "IReadModel",
    "OutboxMessage",
    "UnitOfWork",
    # Middleware
    "EventDispatchingMiddleware",
    "LoggingMiddleware",
    "MiddlewareDefinition",
    "MiddlewareRegistry",
    "OutboxMiddleware",
    "TransactionMiddleware",
    "build_pipeline",
    "get_current_uow",
    # Primitives
    "CQRSMediatorError",
    "DomainError",
    "HandlerError",
    "HandlerNotFoundError",
    "HandlerRegistrationError",
    "MediatorConfigurationError",
    "OutboxError",
    "UnwrapError",
    # Adapters
    "InMemoryOutboxStorage",
    "InMemoryUnitOfWork",
    "in_memory_unit_of_work_factory",
]
