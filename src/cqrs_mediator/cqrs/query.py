"""Query base class."""

from __future__ import annotations

import uuid
from typing import Generic

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypeVar

from ..correlation import get_correlation_id

TAnswer = TypeVar("TAnswer", default=None)


class Query(BaseModel, Generic[TAnswer]):
    """An immutable read request; ``Mediator.ask`` returns a ``TAnswer``.

    Queries never produce events: there is no result envelope and nothing
    reaches the outbox.
    """

    model_config = ConfigDict(frozen=True)

    query_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    correlation_id: str | None = Field(default_factory=get_correlation_id)
