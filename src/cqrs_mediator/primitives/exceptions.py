"""Exceptions for cqrs-mediator.

Business failures are never raised: handlers return them as the ``Err``
branch of a :class:`~cqrs_mediator.cqrs.response.CommandResult`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class CQRSMediatorError(Exception):
    """Root exception for the entire cqrs-mediator package."""


class DomainError(CQRSMediatorError):
    """Base class for all domain-related programming errors."""


class MediatorConfigurationError(CQRSMediatorError):
    """Raised while building a Mediator whose pipeline is misconfigured.

    A mediator that fails this check is never returned to the caller.
    """


class HandlerError(CQRSMediatorError):
    """Base class for all handler related errors (registration, lookup)."""


class HandlerRegistrationError(HandlerError):
    """Raised by a strict HandlerRegistry on a duplicate registration."""


class HandlerNotFoundError(HandlerError):
    """Raised when no handler is registered for a request's exact type.

    Carries the set of registered types for diagnosis.
    """

    def __init__(
        self,
        kind: str,
        request_type: type[object],
        registered_types: Iterable[type[object]],
    ) -> None:
        self.kind = kind
        self.request_type = request_type
        self.registered_types: tuple[type[object], ...] = tuple(registered_types)
        known = (
            ", ".join(sorted(t.__name__ for t in self.registered_types)) or "<none>"
        )
        super().__init__(
            f"No handler registered for {kind} {request_type.__name__}. "
            f"Registered {kind} types: {known}"
        )


class UnwrapError(CQRSMediatorError):
    """Raised when unwrapping the value of an ``Err`` outcome."""


class OutboxError(CQRSMediatorError):
    """Raised when outbox operations are misused or misconfigured."""
