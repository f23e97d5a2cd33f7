from __future__ import annotations

import asyncio

import pytest

from cqrs_mediator.correlation import (
    correlation_scope,
    generate_correlation_id,
    get_causation_id,
    get_context_vars,
    get_correlation_id,
    set_causation_id,
    set_correlation_id,
)


def test_generate_correlation_id_is_unique() -> None:
    assert generate_correlation_id() != generate_correlation_id()


def test_correlation_scope_restores_previous_values() -> None:
    set_correlation_id("outer")
    set_causation_id(None)
    try:
        with correlation_scope("inner", "cmd-1"):
            assert get_context_vars() == {
                "correlation_id": "inner",
                "causation_id": "cmd-1",
            }
            with correlation_scope("inner", "cmd-2"):
                assert get_causation_id() == "cmd-2"
            assert get_causation_id() == "cmd-1"

        assert get_correlation_id() == "outer"
        assert get_causation_id() is None
    finally:
        set_correlation_id(None)


def test_correlation_scope_restores_on_error() -> None:
    with pytest.raises(ValueError), correlation_scope("c", "x"):
        raise ValueError("boom")

    assert get_correlation_id() is None


@pytest.mark.asyncio
async def test_scopes_are_isolated_between_tasks() -> None:
    async def _run(cid: str) -> str | None:
        with correlation_scope(cid):
            await asyncio.sleep(0.01)
            return get_correlation_id()

    results = await asyncio.gather(_run("a"), _run("b"))

    assert results == ["a", "b"]


def test_commands_inherit_tracing_from_scope() -> None:
    from cqrs_mediator.cqrs.command import Command
    from cqrs_mediator.cqrs.query import Query

    class Ping(Command[None]):
        pass

    class Lookup(Query[int]):
        pass

    with correlation_scope("corr-7", "outer-cmd"):
        nested = Ping()
        lookup = Lookup()

    assert nested.correlation_id == "corr-7"
    assert nested.causation_id == "outer-cmd"
    assert lookup.correlation_id == "corr-7"
    assert Ping().correlation_id is None
