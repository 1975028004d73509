"""Unit tests for InMemoryEventBus.

Tests focus on:
- Subscription per event type
- Publishing to handlers in subscription order
- Failed handlers not blocking the others
"""

import pytest
from typing import List

from domain.mealplan.core.events.meal_plan_events import (
    MealPlanCreated,
    MealPlanDeleted,
)
from domain.mealplan.core.value_objects import MealPlanId, OwnerId
from infrastructure.events.in_memory_bus import InMemoryEventBus


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture
def created_event() -> MealPlanCreated:
    return MealPlanCreated.create(MealPlanId.generate(), OwnerId("auth0|U1"), meal_count=3)


@pytest.fixture
def deleted_event() -> MealPlanDeleted:
    return MealPlanDeleted.create(MealPlanId.generate(), OwnerId("auth0|U1"))


class TestPublish:
    @pytest.mark.asyncio
    async def test_publish_calls_handlers_in_order(
        self, event_bus: InMemoryEventBus, created_event: MealPlanCreated
    ) -> None:
        calls: List[str] = []

        async def first(event: MealPlanCreated) -> None:
            calls.append("first")

        async def second(event: MealPlanCreated) -> None:
            calls.append("second")

        event_bus.subscribe(MealPlanCreated, first)
        event_bus.subscribe(MealPlanCreated, second)

        await event_bus.publish(created_event)

        assert calls == ["first", "second"]

    @pytest.mark.asyncio
    async def test_publish_only_matching_type(
        self,
        event_bus: InMemoryEventBus,
        created_event: MealPlanCreated,
        deleted_event: MealPlanDeleted,
    ) -> None:
        received: List[object] = []

        async def handler(event: MealPlanDeleted) -> None:
            received.append(event)

        event_bus.subscribe(MealPlanDeleted, handler)

        await event_bus.publish(created_event)
        await event_bus.publish(deleted_event)

        assert received == [deleted_event]

    @pytest.mark.asyncio
    async def test_publish_without_handlers(
        self, event_bus: InMemoryEventBus, created_event: MealPlanCreated
    ) -> None:
        await event_bus.publish(created_event)

    @pytest.mark.asyncio
    async def test_failed_handler_does_not_block_others(
        self, event_bus: InMemoryEventBus, created_event: MealPlanCreated, caplog
    ) -> None:
        calls: List[str] = []

        async def failing(event: MealPlanCreated) -> None:
            raise RuntimeError("boom")

        async def healthy(event: MealPlanCreated) -> None:
            calls.append("healthy")

        event_bus.subscribe(MealPlanCreated, failing)
        event_bus.subscribe(MealPlanCreated, healthy)

        await event_bus.publish(created_event)

        assert calls == ["healthy"]
        assert any(r.getMessage() == "eventbus.handler_failed" for r in caplog.records)

    @pytest.mark.asyncio
    async def test_double_subscription_called_twice(
        self, event_bus: InMemoryEventBus, created_event: MealPlanCreated
    ) -> None:
        calls: List[int] = []

        async def handler(event: MealPlanCreated) -> None:
            calls.append(event.meal_count)

        event_bus.subscribe(MealPlanCreated, handler)
        event_bus.subscribe(MealPlanCreated, handler)

        await event_bus.publish(created_event)

        assert calls == [3, 3]
