"""Handler Registry — 1:1 mapping from exact request type to handler."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import HandlerRegistrationError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Declarative store for command and query handler instances.

    Each request type maps to exactly one handler. Lookup is by the exact
    runtime type: a handler registered for a base class never serves its
    subclasses.

    **Duplicate registration:** by default the last registration for a type
    wins and the replacement is logged as a warning. Pass ``strict=True`` to
    raise :class:`HandlerRegistrationError` instead. Re-registering the very
    same handler instance is always a no-op.
    """

    def __init__(self, *, strict: bool = False) -> None:
        self._strict = strict
        self._command_handlers: dict[type[Any], Any] = {}
        self._query_handlers: dict[type[Any], Any] = {}

    # ── Registration ─────────────────────────────────────────────

    def register_command_handler(self, command_type: type[Any], handler: Any) -> None:
        self._register(self._command_handlers, "command", command_type, handler)

    def register_query_handler(self, query_type: type[Any], handler: Any) -> None:
        self._register(self._query_handlers, "query", query_type, handler)

    def _register(
        self,
        target: dict[type[Any], Any],
        kind: str,
        message_type: type[Any],
        handler: Any,
    ) -> None:
        existing = target.get(message_type)
        if existing is not None and existing is not handler:
            msg = (
                f"Duplicate {kind} handler for {message_type.__name__}: "
                f"{type(existing).__name__} already registered, "
                f"replacing with {type(handler).__name__}"
            )
            if self._strict:
                raise HandlerRegistrationError(msg)
            logger.warning(msg)
        target[message_type] = handler
        logger.debug(
            "Registered %s handler %s -> %s",
            kind,
            message_type.__name__,
            type(handler).__name__,
        )

    # ── Lookup ───────────────────────────────────────────────────

    def get_command_handler(self, command_type: type[Any]) -> Any | None:
        return self._command_handlers.get(command_type)

    def get_query_handler(self, query_type: type[Any]) -> Any | None:
        return self._query_handlers.get(query_type)

    def command_handlers(self) -> Mapping[type[Any], Any]:
        """Read-only copy of the command handler map."""
        return MappingProxyType(dict(self._command_handlers))

    def query_handlers(self) -> Mapping[type[Any], Any]:
        """Read-only copy of the query handler map."""
        return MappingProxyType(dict(self._query_handlers))

    # ── Introspection ────────────────────────────────────────────

    def get_registered_handlers(self) -> dict[str, dict[str, str]]:
        """Return a snapshot of all registered handlers (for debugging)."""
        return {
            "commands": {
                k.__name__: type(v).__name__ for k, v in self._command_handlers.items()
            },
            "queries": {
                k.__name__: type(v).__name__ for k, v in self._query_handlers.items()
            },
        }

    # ── Cleanup ──────────────────────────────────────────────────

    def clear(self) -> None:
        """Clear all registered handlers (testing utility)."""
        self._command_handlers.clear()
        self._query_handlers.clear()


__all__ = ["HandlerRegistry"]
