"""Entity base class: identity-based equality."""

from __future__ import annotations

from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict

ID = TypeVar("ID", str, int, UUID)


class Entity(BaseModel, Generic[ID]):
    """Base class for domain objects defined by their identity.

    Two entities are equal when they are of the same class and share an
    ``id``; their other attributes may differ.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    id: ID

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if type(other) is not type(self):
            return False
        return bool(self.id == other.id)  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self.id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"

    __str__ = __repr__
