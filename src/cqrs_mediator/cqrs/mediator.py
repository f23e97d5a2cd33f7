"""Mediator — central dispatch point for commands and queries."""

from __future__ import annotations

import logging
from dataclasses import replace
from inspect import isawaitable
from typing import TYPE_CHECKING, Any, TypeVar, cast

from ..correlation import correlation_scope, generate_correlation_id
from ..middleware.outbox import OutboxMiddleware
from ..middleware.pipeline import build_pipeline
from ..middleware.registry import MiddlewareRegistry
from ..middleware.transaction import TransactionMiddleware
from ..ports.bus import ICommandBus, IQueryBus
from ..primitives.exceptions import HandlerNotFoundError, MediatorConfigurationError
from .response import CommandResult

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ..ports.middleware import IMiddleware
    from .command import Command
    from .query import Query
    from .registry import HandlerRegistry

logger = logging.getLogger(__name__)

TResult = TypeVar("TResult")


class Mediator(ICommandBus, IQueryBus):
    """Routes commands / queries through middleware to their handlers.

    The mediator is configured once and holds no per-call state: handler maps
    are copied out of the registry and both middleware chains are built at
    construction, so concurrent ``send`` / ``ask`` calls need no locking.
    Later changes to the registry do not affect an existing mediator.

    **Ordering rules** (checked here, before any request is handled):

    - at most one :class:`OutboxMiddleware` in the command middlewares;
    - when both are present, :class:`TransactionMiddleware` must come
      before :class:`OutboxMiddleware` so the outbox write shares the
      business transaction.

    Violations raise :class:`MediatorConfigurationError`.

    Parameters
    ----------
    registry:
        :class:`~cqrs_mediator.cqrs.registry.HandlerRegistry` instance.
    command_middlewares:
        Ordered middleware list (first = outermost) or a
        :class:`~cqrs_mediator.middleware.registry.MiddlewareRegistry`.
    query_middlewares:
        Same, for the query pipeline.
    """

    def __init__(
        self,
        registry: HandlerRegistry,
        *,
        command_middlewares: Sequence[IMiddleware] | MiddlewareRegistry = (),
        query_middlewares: Sequence[IMiddleware] | MiddlewareRegistry = (),
    ) -> None:
        command_chain = _resolve_middlewares(command_middlewares, "command")
        query_chain = _resolve_middlewares(query_middlewares, "query")
        _validate_command_middleware_ordering(command_chain)

        self._command_handlers: Mapping[type[Any], Any] = registry.command_handlers()
        self._query_handlers: Mapping[type[Any], Any] = registry.query_handlers()
        self._command_middlewares: tuple[IMiddleware, ...] = tuple(command_chain)
        self._query_middlewares: tuple[IMiddleware, ...] = tuple(query_chain)

        self._command_pipeline = build_pipeline(command_chain, self._dispatch_command)
        self._query_pipeline = build_pipeline(query_chain, self._dispatch_query)

        logger.debug(
            "Mediator built: %d command handler(s), %d query handler(s), "
            "command middlewares=%s, query middlewares=%s",
            len(self._command_handlers),
            len(self._query_handlers),
            [type(mw).__name__ for mw in self._command_middlewares],
            [type(mw).__name__ for mw in self._query_middlewares],
        )

    # ── Public API ───────────────────────────────────────────────

    async def send(self, command: Command[TResult]) -> CommandResult[TResult]:
        """Dispatch a *command* through the command middleware pipeline.

        Raises :class:`HandlerNotFoundError` when no handler is registered
        for ``type(command)``; business failures come back as ``Err``.
        """
        command = _ensure_correlation_id(command)
        correlation_id = getattr(command, "correlation_id", None)
        with correlation_scope(correlation_id, getattr(command, "command_id", None)):
            result = await self._command_pipeline(command)
        return cast("CommandResult[TResult]", self._propagate_ids(command, result))

    async def ask(self, query: Query[TResult]) -> TResult:
        """Dispatch a *query* through the query middleware pipeline."""
        query = _ensure_correlation_id(query)
        correlation_id = getattr(query, "correlation_id", None)
        with correlation_scope(correlation_id, getattr(query, "query_id", None)):
            return cast("TResult", await self._query_pipeline(query))

    @property
    def command_middlewares(self) -> tuple[IMiddleware, ...]:
        return self._command_middlewares

    @property
    def query_middlewares(self) -> tuple[IMiddleware, ...]:
        return self._query_middlewares

    # ── Internals ────────────────────────────────────────────────

    async def _dispatch_command(self, command: Any) -> Any:
        handler = self._command_handlers.get(type(command))
        if handler is None:
            raise HandlerNotFoundError(
                "command", type(command), self._command_handlers.keys()
            )
        return await _invoke_handler(handler, command)

    async def _dispatch_query(self, query: Any) -> Any:
        handler = self._query_handlers.get(type(query))
        if handler is None:
            raise HandlerNotFoundError("query", type(query), self._query_handlers.keys())
        return await _invoke_handler(handler, query)

    def _propagate_ids(self, message: Any, response: Any) -> Any:
        """Propagate correlation ID and causation ID from command to result."""
        if not isinstance(response, CommandResult):
            return response

        correlation_id = response.correlation_id or getattr(
            message, "correlation_id", None
        )
        causation_id = response.causation_id or getattr(message, "command_id", None)

        # CommandResult is a frozen dataclass, use replace
        return replace(
            response, correlation_id=correlation_id, causation_id=causation_id
        )


def _resolve_middlewares(
    source: Sequence[IMiddleware] | MiddlewareRegistry,
    kind: str,
) -> list[IMiddleware]:
    if isinstance(source, MiddlewareRegistry):
        return source.get_ordered_middlewares(kind)
    return list(source)


def _validate_command_middleware_ordering(middlewares: Sequence[IMiddleware]) -> None:
    outbox_positions = [
        i for i, mw in enumerate(middlewares) if isinstance(mw, OutboxMiddleware)
    ]
    if len(outbox_positions) > 1:
        raise MediatorConfigurationError(
            f"OutboxMiddleware is registered {len(outbox_positions)} times. "
            "It must appear at most once."
        )
    tx_position = next(
        (i for i, mw in enumerate(middlewares) if isinstance(mw, TransactionMiddleware)),
        None,
    )
    if outbox_positions and tx_position is not None:
        if tx_position > outbox_positions[0]:
            raise MediatorConfigurationError(
                "TransactionMiddleware must be placed before OutboxMiddleware "
                "so the outbox write joins the business transaction."
            )


def _ensure_correlation_id(message: Any) -> Any:
    if getattr(message, "correlation_id", "missing") is None and hasattr(
        message, "model_copy"
    ):
        # model_copy keeps the request immutable
        return message.model_copy(update={"correlation_id": generate_correlation_id()})
    return message


async def _invoke_handler(handler: Any, message: Any) -> Any:
    if hasattr(handler, "handle"):
        result = handler.handle(message)
    elif callable(handler):
        result = handler(message)
    else:
        raise TypeError("Handler must be a callable or have a handle() method")
    if isawaitable(result):
        result = await result
    return result
