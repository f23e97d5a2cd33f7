"""Tests for EventDispatcher and ProjectionHandler."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from cqrs_mediator.cqrs.event_dispatcher import EventDispatcher
from cqrs_mediator.cqrs.handler import EventHandler
from cqrs_mediator.cqrs.projection import ProjectionHandler
from cqrs_mediator.domain.events import DomainEvent
from cqrs_mediator.ports.event_dispatcher import IEventDispatcher


class OrderCreated(DomainEvent):
    order_id: str = ""


class PriorityOrderCreated(OrderCreated):
    pass


class OrderShipped(DomainEvent):
    order_id: str = ""


class RecordingHandler(EventHandler[OrderCreated]):
    def __init__(self, name: str, calls: list[str]) -> None:
        self.name = name
        self.calls = calls

    async def handle(self, event: OrderCreated) -> None:
        self.calls.append(self.name)


class FailingHandler(EventHandler[OrderCreated]):
    async def handle(self, event: OrderCreated) -> None:
        raise RuntimeError("projection failed")


def test_dispatcher_satisfies_protocol() -> None:
    assert isinstance(EventDispatcher(), IEventDispatcher)


@pytest.mark.asyncio
async def test_handlers_run_in_registration_order() -> None:
    calls: list[str] = []
    dispatcher: EventDispatcher[OrderCreated] = EventDispatcher()
    for name in ("h1", "h2", "h3"):
        dispatcher.register(OrderCreated, RecordingHandler(name, calls))

    await dispatcher.dispatch(OrderCreated(order_id="o1"))

    assert calls == ["h1", "h2", "h3"]


@pytest.mark.asyncio
async def test_same_handler_registered_twice_runs_twice() -> None:
    calls: list[str] = []
    handler = RecordingHandler("h", calls)
    dispatcher: EventDispatcher[OrderCreated] = EventDispatcher()
    dispatcher.register(OrderCreated, handler)
    dispatcher.register(OrderCreated, handler)

    await dispatcher.dispatch(OrderCreated())

    assert calls == ["h", "h"]


@pytest.mark.asyncio
async def test_exact_type_matching_only() -> None:
    calls: list[str] = []
    dispatcher: EventDispatcher[Any] = EventDispatcher()
    dispatcher.register(OrderCreated, RecordingHandler("base", calls))
    dispatcher.register(DomainEvent, RecordingHandler("root", calls))

    await dispatcher.dispatch(PriorityOrderCreated(order_id="p1"))

    assert calls == []


@pytest.mark.asyncio
async def test_no_handlers_is_noop() -> None:
    dispatcher: EventDispatcher[Any] = EventDispatcher()
    await dispatcher.dispatch(OrderShipped())


@pytest.mark.asyncio
async def test_first_failure_aborts_and_propagates(caplog) -> None:
    calls: list[str] = []
    dispatcher: EventDispatcher[OrderCreated] = EventDispatcher()
    dispatcher.register(OrderCreated, RecordingHandler("h1", calls))
    dispatcher.register(OrderCreated, FailingHandler())
    dispatcher.register(OrderCreated, RecordingHandler("h3", calls))

    event = OrderCreated(order_id="o1")
    with pytest.raises(RuntimeError, match="projection failed"):
        await dispatcher.dispatch(event)

    assert calls == ["h1"]
    assert "FailingHandler" in caplog.text
    assert event.event_id in caplog.text


@pytest.mark.asyncio
async def test_sync_and_async_callables() -> None:
    received: list[str] = []

    def sync_handler(event: OrderCreated) -> None:
        received.append(f"sync:{event.order_id}")

    async def async_handler(event: OrderCreated) -> None:
        received.append(f"async:{event.order_id}")

    dispatcher: EventDispatcher[OrderCreated] = EventDispatcher()
    dispatcher.register(OrderCreated, sync_handler)
    dispatcher.register(OrderCreated, async_handler)

    await dispatcher.dispatch(OrderCreated(order_id="o9"))

    assert received == ["sync:o9", "async:o9"]


@pytest.mark.asyncio
async def test_handler_object_with_async_mock() -> None:
    handler = MagicMock()
    handler.handle = AsyncMock()
    dispatcher: EventDispatcher[OrderCreated] = EventDispatcher()
    dispatcher.register(OrderCreated, handler)

    event = OrderCreated(order_id="o1")
    await dispatcher.dispatch(event)

    handler.handle.assert_awaited_once_with(event)


@pytest.mark.asyncio
async def test_dispatch_all_in_order_stops_at_failure() -> None:
    received: list[str] = []
    dispatcher: EventDispatcher[Any] = EventDispatcher()
    dispatcher.register(OrderCreated, lambda e: received.append(e.order_id))

    def fail_on_ship(event: OrderShipped) -> None:
        raise ValueError("cannot ship")

    dispatcher.register(OrderShipped, fail_on_ship)

    with pytest.raises(ValueError):
        await dispatcher.dispatch_all(
            [
                OrderCreated(order_id="a"),
                OrderShipped(order_id="a"),
                OrderCreated(order_id="b"),
            ]
        )

    assert received == ["a"]


def test_introspection_and_clear() -> None:
    dispatcher: EventDispatcher[Any] = EventDispatcher()
    handler = RecordingHandler("h", [])
    dispatcher.register(OrderCreated, handler)

    registered = dispatcher.get_registered_handlers()
    assert registered == {OrderCreated: [handler]}

    registered[OrderCreated].append(handler)
    assert len(dispatcher.get_registered_handlers()[OrderCreated]) == 1

    dispatcher.clear()
    assert dispatcher.get_registered_handlers() == {}


class OrderCounter:
    def __init__(self) -> None:
        self.applied: list[DomainEvent] = []

    def apply(self, event: DomainEvent) -> None:
        self.applied.append(event)


@pytest.mark.asyncio
async def test_projection_handler_applies_events_to_read_model() -> None:
    read_model = OrderCounter()
    projection = ProjectionHandler(read_model)
    dispatcher: EventDispatcher[Any] = EventDispatcher()
    dispatcher.register(OrderCreated, projection)
    dispatcher.register(OrderShipped, projection)

    created = OrderCreated(order_id="o1")
    shipped = OrderShipped(order_id="o1")
    await dispatcher.dispatch_all([created, shipped])

    assert read_model.applied == [created, shipped]
