"""Unit tests for UpsertMealPlanHandler."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from application.mealplan.commands import UpsertMealPlanCommand, UpsertMealPlanHandler
from domain.mealplan.core.entities.meal_plan import MealPlan
from domain.mealplan.core.events import MealPlanCreated, MealPlanUpdated
from domain.mealplan.core.exceptions import (
    IntegrityFaultError,
    InvalidPayloadError,
    PersistenceFaultError,
)
from domain.mealplan.core.ports.meal_plan_repository import IMealPlanRepository
from domain.mealplan.core.value_objects import DateRange, OwnerId, PlannedMeal
from infrastructure.persistence.in_memory.meal_plan_repository import InMemoryMealPlanRepository


@pytest.fixture
def handler(repository: InMemoryMealPlanRepository) -> UpsertMealPlanHandler:
    return UpsertMealPlanHandler(repository)


@pytest.fixture
def mock_repository() -> AsyncMock:
    return AsyncMock(spec=IMealPlanRepository)


class TestUpsertCreates:
    @pytest.mark.asyncio
    async def test_first_upsert_inserts_one_plan(
        self, handler: UpsertMealPlanHandler, repository: InMemoryMealPlanRepository, owner: OwnerId, flat_payload: dict
    ) -> None:
        result = await handler.handle(UpsertMealPlanCommand(owner, flat_payload))

        assert result.created is True
        assert result.plan.owner_id == owner
        assert result.plan.meals == [PlannedMeal("R1", date(2024, 2, 1), 2)]
        assert repository.count() == 1
        assert repository.insert_count == 1
        assert repository.replace_count == 0

    @pytest.mark.asyncio
    async def test_returns_created_event(
        self, handler: UpsertMealPlanHandler, owner: OwnerId, flat_payload: dict
    ) -> None:
        result = await handler.handle(UpsertMealPlanCommand(owner, flat_payload))

        assert [type(e) for e in result.events] == [MealPlanCreated]

    @pytest.mark.asyncio
    async def test_name_kept_on_create(self, handler: UpsertMealPlanHandler, owner: OwnerId, flat_payload: dict) -> None:
        result = await handler.handle(UpsertMealPlanCommand(owner, {**flat_payload, "name": "Week 6"}))
        assert result.plan.name == "Week 6"


class TestUpsertReplaces:
    @pytest.mark.asyncio
    async def test_second_upsert_replaces_meals_and_keeps_identity(
        self, handler: UpsertMealPlanHandler, repository: InMemoryMealPlanRepository, owner: OwnerId, flat_payload: dict
    ) -> None:
        first = await handler.handle(UpsertMealPlanCommand(owner, flat_payload))

        second = await handler.handle(
            UpsertMealPlanCommand(
                owner,
                {
                    "meals": [{"recipeId": "R2", "date": "2024-02-02", "servings": 1}],
                    "dateRange": {"start": "2024-02-02", "end": "2024-02-02"},
                },
            )
        )

        assert second.created is False
        assert second.plan.plan_id == first.plan.plan_id
        assert second.plan.owner_id == owner
        assert second.plan.meals == [PlannedMeal("R2", date(2024, 2, 2), 1)]
        assert second.plan.date_range == DateRange(date(2024, 2, 2), date(2024, 2, 2))
        assert second.plan.created_at == first.plan.created_at
        assert repository.count() == 1
        assert [type(e) for e in second.events] == [MealPlanUpdated]

    @pytest.mark.asyncio
    async def test_replace_keeps_existing_name(
        self, handler: UpsertMealPlanHandler, owner: OwnerId, flat_payload: dict
    ) -> None:
        await handler.handle(UpsertMealPlanCommand(owner, {**flat_payload, "name": "Week 6"}))

        result = await handler.handle(UpsertMealPlanCommand(owner, {**flat_payload, "name": "Other"}))

        assert result.plan.name == "Week 6"

    @pytest.mark.asyncio
    async def test_description_kept_on_create_and_replace(
        self, handler: UpsertMealPlanHandler, owner: OwnerId, flat_payload: dict
    ) -> None:
        created = await handler.handle(
            UpsertMealPlanCommand(owner, {**flat_payload, "description": "Batch cooking"})
        )

        replaced = await handler.handle(
            UpsertMealPlanCommand(owner, {**flat_payload, "description": "Something else"})
        )

        assert created.plan.description == "Batch cooking"
        assert replaced.plan.description == "Batch cooking"

    @pytest.mark.asyncio
    async def test_identical_upserts_are_idempotent(
        self, handler: UpsertMealPlanHandler, repository: InMemoryMealPlanRepository, owner: OwnerId, flat_payload: dict
    ) -> None:
        first = await handler.handle(UpsertMealPlanCommand(owner, flat_payload))
        second = await handler.handle(UpsertMealPlanCommand(owner, flat_payload))

        assert repository.count() == 1
        assert second.plan.plan_id == first.plan.plan_id
        assert second.plan.meals == first.plan.meals
        assert second.plan.date_range == first.plan.date_range

    @pytest.mark.asyncio
    async def test_owners_are_isolated(
        self, handler: UpsertMealPlanHandler, repository: InMemoryMealPlanRepository,
        owner: OwnerId, other_owner: OwnerId, flat_payload: dict,
    ) -> None:
        mine = await handler.handle(UpsertMealPlanCommand(owner, flat_payload))
        theirs = await handler.handle(UpsertMealPlanCommand(other_owner, flat_payload))

        assert theirs.created is True
        assert mine.plan.plan_id != theirs.plan.plan_id
        assert repository.count() == 2


class TestUpsertFailures:
    @pytest.mark.asyncio
    async def test_invalid_payload_never_touches_store(self, mock_repository: AsyncMock, owner: OwnerId) -> None:
        handler = UpsertMealPlanHandler(mock_repository)

        with pytest.raises(InvalidPayloadError):
            await handler.handle(UpsertMealPlanCommand(owner, None))

        mock_repository.find_one_by_owner.assert_not_called()
        mock_repository.insert.assert_not_called()
        mock_repository.replace.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicated_owner_data_is_integrity_fault(self, owner: OwnerId, flat_payload: dict) -> None:
        repository = InMemoryMealPlanRepository(enforce_unique_owner=False)
        for _ in range(2):
            plan = MealPlan.create(owner, [], DateRange(date(2024, 2, 1), date(2024, 2, 1)))
            await repository.insert(plan)

        with pytest.raises(IntegrityFaultError):
            await UpsertMealPlanHandler(repository).handle(UpsertMealPlanCommand(owner, flat_payload))

        assert repository.replace_count == 0

    @pytest.mark.asyncio
    async def test_lost_insert_race_is_integrity_fault(
        self, mock_repository: AsyncMock, owner: OwnerId, flat_payload: dict
    ) -> None:
        mock_repository.find_one_by_owner.return_value = None
        mock_repository.insert.side_effect = IntegrityFaultError(owner.value, "duplicate key")

        with pytest.raises(IntegrityFaultError):
            await UpsertMealPlanHandler(mock_repository).handle(UpsertMealPlanCommand(owner, flat_payload))

    @pytest.mark.asyncio
    async def test_store_failure_propagates(
        self, mock_repository: AsyncMock, owner: OwnerId, flat_payload: dict
    ) -> None:
        mock_repository.find_one_by_owner.side_effect = PersistenceFaultError("find_many", "timeout")

        with pytest.raises(PersistenceFaultError):
            await UpsertMealPlanHandler(mock_repository).handle(UpsertMealPlanCommand(owner, flat_payload))

        mock_repository.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_plan_vanishing_during_replace(
        self, mock_repository: AsyncMock, owner: OwnerId, flat_payload: dict
    ) -> None:
        existing = MealPlan.create(owner, [], DateRange(date(2024, 2, 1), date(2024, 2, 1)))
        mock_repository.find_one_by_owner.return_value = existing
        mock_repository.replace.return_value = None

        with pytest.raises(PersistenceFaultError, match="disappeared"):
            await UpsertMealPlanHandler(mock_repository).handle(UpsertMealPlanCommand(owner, flat_payload))

        mock_repository.insert.assert_not_called()
