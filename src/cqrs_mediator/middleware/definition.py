"""MiddlewareDefinition — one deferred entry of a MiddlewareRegistry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..ports.middleware import IMiddleware

#: Which pipeline(s) a registered middleware joins.
MiddlewareScope = Literal["command", "query", "both"]

MIDDLEWARE_SCOPES: tuple[str, ...] = ("command", "query", "both")


@dataclass(frozen=True)
class MiddlewareDefinition:
    """What to build, where it sits, and which pipelines it wraps.

    The instance is only constructed when a ``Mediator`` resolves the
    registry, so definitions can reference resources (storages, unit-of-work
    factories) that are wired up later in application start-up.
    """

    middleware_cls: type[Any]
    priority: int = 0
    scope: MiddlewareScope = "both"
    factory: Callable[..., IMiddleware] | None = None
    kwargs: dict[str, object] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.middleware_cls.__name__

    def applies_to(self, kind: str) -> bool:
        """True when this middleware belongs in the *kind* pipeline."""
        return self.scope == "both" or self.scope == kind

    def build(self) -> IMiddleware:
        if self.factory is not None:
            return self.factory(**self.kwargs)
        return self.middleware_cls(**self.kwargs)
