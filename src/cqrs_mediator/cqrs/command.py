"""Command base class."""

from __future__ import annotations

import uuid
from typing import Generic

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import TypeVar

from ..correlation import get_causation_id, get_correlation_id

TResult = TypeVar("TResult", default=None)


class Command(BaseModel, Generic[TResult]):
    """An immutable request to change state, handled by exactly one handler.

    ``TResult`` is the value carried by a successful ``CommandResult``::

        class OpenAccount(Command[str]):
            account_id: str
            initial: int

    Tracing ids default from the active correlation scope. A command built
    inside another command's handler therefore shares its correlation id and
    records the outer command as its cause. Outside any scope
    ``correlation_id`` is ``None`` and ``Mediator.send`` assigns a fresh one.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    command_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    correlation_id: str | None = Field(default_factory=get_correlation_id)
    causation_id: str | None = Field(default_factory=get_causation_id)
