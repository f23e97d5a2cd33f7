from .outbox import InMemoryOutboxStorage
from .unit_of_work import InMemoryUnitOfWork, in_memory_unit_of_work_factory

__all__ = [
    "InMemoryOutboxStorage",
    "InMemoryUnitOfWork",
    "in_memory_unit_of_work_factory",
]
