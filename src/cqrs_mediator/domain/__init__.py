"""Domain primitives: entities, value objects, events and aggregates."""

from .aggregate import AggregateRoot
from .entity import Entity
from .events import DomainEvent, enrich_event_metadata
from .value_object import ValueObject

__all__ = [
    "AggregateRoot",
    "DomainEvent",
    "Entity",
    "ValueObject",
    "enrich_event_metadata",
]
