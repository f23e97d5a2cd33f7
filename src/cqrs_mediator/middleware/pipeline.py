"""build_pipeline — fold middlewares around a terminal handler."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..primitives.exceptions import MediatorConfigurationError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from ..ports.middleware import IMiddleware

    Continuation = Callable[[Any], Awaitable[Any]]


def build_pipeline(
    middlewares: Sequence[IMiddleware],
    handler_fn: Continuation,
) -> Continuation:
    """Return a single callable running *middlewares* around *handler_fn*.

    Folded from the last middleware to the first, so ``middlewares[0]`` is
    the outermost layer. The chain is built once; calling the result is just
    a walk through pre-linked closures.
    """
    for position, mw in enumerate(middlewares):
        if not callable(mw):
            raise MediatorConfigurationError(
                f"Middleware at position {position} ({type(mw).__name__}) "
                "is not callable"
            )

    pipeline = handler_fn
    for mw in reversed(middlewares):
        pipeline = _link(mw, pipeline)
    return pipeline


def _link(mw: IMiddleware, next_handler: Continuation) -> Continuation:
    async def step(message: Any) -> Any:
        return await mw(message, next_handler)

    step.__qualname__ = f"{type(mw).__name__}.step"
    return step
