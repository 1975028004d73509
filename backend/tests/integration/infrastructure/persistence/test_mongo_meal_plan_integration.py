"""Integration tests for MongoMealPlanRepository.

Runs against a real MongoDB test database.
Requires REPOSITORY_BACKEND=mongodb and MONGODB_URI in the environment.
"""

import os
from datetime import date

import pytest

from domain.mealplan.core.entities.meal_plan import MealPlan
from domain.mealplan.core.exceptions import IntegrityFaultError
from domain.mealplan.core.value_objects import DateRange, OwnerId, PlannedMeal
from infrastructure.persistence.mongodb.meal_plan_repository import MongoMealPlanRepository


pytestmark = pytest.mark.skipif(
    os.getenv("REPOSITORY_BACKEND") != "mongodb",
    reason="MongoDB integration tests require REPOSITORY_BACKEND=mongodb",
)

FEB_1 = date(2024, 2, 1)


@pytest.fixture
async def mongo_repo():
    repo = MongoMealPlanRepository()
    await repo.ensure_indexes()
    yield repo
    await repo.collection.delete_many({"owner_id": {"$regex": "^test_owner_"}})
    await repo.close()


def _plan(owner: str, recipe: str = "R1") -> MealPlan:
    return MealPlan.create(
        owner_id=OwnerId(owner),
        meals=[PlannedMeal(recipe, FEB_1, 2)],
        date_range=DateRange(FEB_1, FEB_1),
    )


@pytest.mark.asyncio
class TestMongoMealPlanRepository:
    async def test_insert_and_find_by_owner(self, mongo_repo):
        plan = _plan("test_owner_1")

        await mongo_repo.insert(plan)
        found = await mongo_repo.find_one_by_owner(OwnerId("test_owner_1"))

        assert found is not None
        assert found.plan_id == plan.plan_id
        assert found.meals == plan.meals

    async def test_second_insert_for_owner_is_integrity_fault(self, mongo_repo):
        await mongo_repo.insert(_plan("test_owner_2"))

        with pytest.raises(IntegrityFaultError):
            await mongo_repo.insert(_plan("test_owner_2"))

    async def test_replace_keeps_id_and_created_at(self, mongo_repo):
        plan = await mongo_repo.insert(_plan("test_owner_3"))
        plan.replace_contents([PlannedMeal("R2", FEB_1, 1)], DateRange(FEB_1, FEB_1))

        replaced = await mongo_repo.replace(plan)

        assert replaced is not None
        assert replaced.plan_id == plan.plan_id
        assert replaced.created_at == plan.created_at
        assert replaced.meals == [PlannedMeal("R2", FEB_1, 1)]

    async def test_delete(self, mongo_repo):
        plan = await mongo_repo.insert(_plan("test_owner_4"))

        assert await mongo_repo.delete_by_id(plan.plan_id) is True
        assert await mongo_repo.find_by_id(plan.plan_id) is None
        assert await mongo_repo.delete_by_id(plan.plan_id) is False
