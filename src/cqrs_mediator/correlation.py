"""Correlation and causation ids carried across awaits and nested sends.

The mediator opens a :func:`correlation_scope` for every ``send`` / ``ask``:
the correlation id ties together everything triggered by one external
request, the causation id names the request currently being handled.
Messages and events created inside the scope pick both up as defaults.
"""

from __future__ import annotations

import contextlib
import uuid
from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_causation_id: ContextVar[str | None] = ContextVar("causation_id", default=None)


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> None:
    _correlation_id.set(correlation_id)


def get_causation_id() -> str | None:
    return _causation_id.get()


def set_causation_id(causation_id: str | None) -> None:
    _causation_id.set(causation_id)


def generate_correlation_id() -> str:
    return str(uuid.uuid4())


def get_context_vars() -> dict[str, str | None]:
    """Both ids as a dict, e.g. to re-bind them in a spawned task or log record."""
    return {
        "correlation_id": _correlation_id.get(),
        "causation_id": _causation_id.get(),
    }


@contextlib.contextmanager
def correlation_scope(
    correlation_id: str | None, causation_id: str | None = None
) -> Iterator[None]:
    """Bind both ids for the block and restore the outer values on exit."""
    tokens = (_correlation_id.set(correlation_id), _causation_id.set(causation_id))
    try:
        yield
    finally:
        _causation_id.reset(tokens[1])
        _correlation_id.reset(tokens[0])
