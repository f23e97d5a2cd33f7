from __future__ import annotations

import pytest

from cqrs_mediator.adapters.memory.unit_of_work import (
    InMemoryUnitOfWork,
    in_memory_unit_of_work_factory,
)


@pytest.mark.asyncio()
async def test_uow_context_manager_commits_on_exit() -> None:
    uow = InMemoryUnitOfWork()

    async with uow:
        pass

    assert uow.committed
    assert uow.commit_count == 1
    assert not uow.rolled_back


@pytest.mark.asyncio()
async def test_uow_context_manager_rollback_on_error() -> None:
    uow = InMemoryUnitOfWork()

    with pytest.raises(ValueError, match="oops"):
        async with uow:
            raise ValueError("oops")

    assert not uow.committed
    assert uow.rolled_back
    assert uow.rollback_count == 1


@pytest.mark.asyncio()
async def test_uow_manual_rollback_wins() -> None:
    uow = InMemoryUnitOfWork()

    async with uow:
        await uow.rollback()

    assert uow.rolled_back
    assert not uow.committed


@pytest.mark.asyncio()
async def test_on_commit_hooks_run_after_commit() -> None:
    uow = InMemoryUnitOfWork()
    seen: list[bool] = []

    async def hook() -> None:
        seen.append(uow.committed)

    async with uow:
        uow.on_commit(hook)
        assert seen == []

    assert seen == [True]


@pytest.mark.asyncio()
async def test_on_commit_hooks_dropped_on_rollback() -> None:
    uow = InMemoryUnitOfWork()
    seen: list[str] = []

    async def hook() -> None:
        seen.append("ran")

    with pytest.raises(RuntimeError):
        async with uow:
            uow.on_commit(hook)
            raise RuntimeError("fail")

    await uow.trigger_commit_hooks()
    assert seen == []


@pytest.mark.asyncio()
async def test_failing_hook_is_logged_and_others_run(caplog) -> None:
    uow = InMemoryUnitOfWork()
    seen: list[str] = []

    async def bad() -> None:
        raise RuntimeError("hook broke")

    async def good() -> None:
        seen.append("good")

    async with uow:
        uow.on_commit(bad)
        uow.on_commit(good)

    assert seen == ["good"]
    assert "Error in on_commit hook" in caplog.text


def test_factory_returns_fresh_instances() -> None:
    assert in_memory_unit_of_work_factory() is not in_memory_unit_of_work_factory()


@pytest.mark.asyncio()
async def test_first_outcome_wins() -> None:
    uow = InMemoryUnitOfWork()
    assert not uow.is_finished

    await uow.commit()
    await uow.rollback()
    await uow.commit()

    assert uow.is_finished
    assert uow.committed
    assert uow.commit_count == 1
    assert uow.rollback_count == 0
