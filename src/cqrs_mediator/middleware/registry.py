"""MiddlewareRegistry — priority-ordered middleware for both pipelines."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import MediatorConfigurationError
from .definition import MIDDLEWARE_SCOPES, MiddlewareDefinition

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..ports.middleware import IMiddleware
    from .definition import MiddlewareScope

logger = logging.getLogger(__name__)


class MiddlewareRegistry:
    """Collects middleware definitions for the command and query pipelines.

    Lower ``priority`` means further out in the chain; equal priorities keep
    registration order. Each definition names the pipeline(s) it joins via
    ``scope``. A middleware registered for ``"both"`` is built once and the
    same instance wraps commands and queries.

    Pass the registry as ``command_middlewares`` and/or ``query_middlewares``
    to a ``Mediator``; it picks the entries for each pipeline and then runs
    the usual ordering checks on the result::

        middlewares = MiddlewareRegistry()
        middlewares.register(LoggingMiddleware, priority=0)
        middlewares.register(
            TransactionMiddleware, priority=10, scope="command", uow_factory=make_uow
        )
        middlewares.register(
            OutboxMiddleware, priority=20, scope="command", storage=outbox
        )
        mediator = Mediator(
            handlers, command_middlewares=middlewares, query_middlewares=middlewares
        )
    """

    def __init__(self) -> None:
        self._definitions: list[MiddlewareDefinition] = []
        self._built: dict[int, IMiddleware] | None = None

    # ── Registration ─────────────────────────────────────────────

    def register(
        self,
        middleware_cls: type[Any],
        *,
        priority: int = 0,
        scope: MiddlewareScope = "both",
        factory: Callable[..., IMiddleware] | None = None,
        **kwargs: object,
    ) -> MiddlewareDefinition:
        """Register *middleware_cls*; *kwargs* go to its constructor or *factory*."""
        if scope not in MIDDLEWARE_SCOPES:
            raise MediatorConfigurationError(
                f"Unknown middleware scope {scope!r} for {middleware_cls.__name__}; "
                f"expected one of {', '.join(MIDDLEWARE_SCOPES)}"
            )
        definition = MiddlewareDefinition(
            middleware_cls=middleware_cls,
            priority=priority,
            scope=scope,
            factory=factory,
            kwargs=dict(kwargs),
        )
        self._definitions.append(definition)
        self._built = None
        logger.debug(
            "Registered middleware %s (priority=%d, scope=%s)",
            definition.name,
            priority,
            scope,
        )
        return definition

    def add(
        self,
        middleware_cls: type[Any] | None = None,
        *,
        priority: int = 0,
        scope: MiddlewareScope = "both",
        factory: Callable[..., IMiddleware] | None = None,
        **kwargs: object,
    ) -> Any:
        """Decorator form of :meth:`register`.

        Usage::

            @middlewares.add
            class AuditMiddleware: ...

            @middlewares.add(priority=5, scope="query")
            class CachingMiddleware: ...
        """
        if middleware_cls is None:

            def wrapper(cls: type[Any]) -> type[Any]:
                self.register(
                    cls, priority=priority, scope=scope, factory=factory, **kwargs
                )
                return cls

            return wrapper

        self.register(
            middleware_cls, priority=priority, scope=scope, factory=factory, **kwargs
        )
        return middleware_cls

    # ── Retrieval ────────────────────────────────────────────────

    @property
    def definitions(self) -> tuple[MiddlewareDefinition, ...]:
        return tuple(self._definitions)

    def get_ordered_middlewares(self, kind: str | None = None) -> list[IMiddleware]:
        """Middleware instances for the *kind* pipeline, outermost first.

        ``kind`` is ``"command"`` or ``"query"``; ``None`` returns every
        registered middleware regardless of scope.
        """
        built = self._build_all()
        ordered = sorted(
            enumerate(self._definitions), key=lambda item: item[1].priority
        )
        return [
            built[index]
            for index, definition in ordered
            if kind is None or definition.applies_to(kind)
        ]

    def command_middlewares(self) -> list[IMiddleware]:
        return self.get_ordered_middlewares("command")

    def query_middlewares(self) -> list[IMiddleware]:
        return self.get_ordered_middlewares("query")

    def _build_all(self) -> dict[int, IMiddleware]:
        if self._built is None:
            self._built = {
                index: definition.build()
                for index, definition in enumerate(self._definitions)
            }
        return self._built

    # ── Cleanup ──────────────────────────────────────────────────

    def clear(self) -> None:
        """Remove all registrations (testing utility)."""
        self._definitions.clear()
        self._built = None
