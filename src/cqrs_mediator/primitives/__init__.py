from .exceptions import (
    CQRSMediatorError,
    DomainError,
    HandlerError,
    HandlerNotFoundError,
    HandlerRegistrationError,
    MediatorConfigurationError,
    OutboxError,
    UnwrapError,
)

__all__ = [
    "CQRSMediatorError",
    "DomainError",
    "HandlerError",
    "HandlerNotFoundError",
    "HandlerRegistrationError",
    "MediatorConfigurationError",
    "OutboxError",
    "UnwrapError",
]
