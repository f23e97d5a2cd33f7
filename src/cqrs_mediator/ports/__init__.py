from .background_worker import IBackgroundWorker
from .bus import ICommandBus, IQueryBus
from .event_dispatcher import IEventDispatcher
from .messaging import IEventPublisher
from .middleware import IMiddleware
from .outbox import IOutboxStorage, OutboxMessage
from .projection import IReadModel
from .unit_of_work import UnitOfWork

__all__ = [
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
]
