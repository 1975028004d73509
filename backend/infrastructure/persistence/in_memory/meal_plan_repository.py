"""In-memory meal plan repository implementation.

Provides an in-memory implementation of IMealPlanRepository for tests and
local development. Uses a dictionary for storage with no external dependencies.
"""

from copy import deepcopy
from typing import Dict, List, Optional

from domain.mealplan.core.entities.meal_plan import MealPlan
from domain.mealplan.core.exceptions.mealplan_errors import IntegrityFaultError
from domain.mealplan.core.ports.meal_plan_repository import IMealPlanRepository
from domain.mealplan.core.value_objects.meal_plan_id import MealPlanId
from domain.mealplan.core.value_objects.owner_id import OwnerId


class InMemoryMealPlanRepository(IMealPlanRepository):
    """
    In-memory implementation of IMealPlanRepository.

    Thread safety: NOT thread-safe
    Persistence: Data lost on process restart

    Plans are deep-copied on the way in and out, so callers never share
    state with the store. ``enforce_unique_owner=False`` lets tests seed
    duplicated legacy data.

    Example:
        >>> repository = InMemoryMealPlanRepository()
        >>> await repository.insert(plan)
        >>> found = await repository.find_one_by_owner(plan.owner_id)
    """

    def __init__(self, enforce_unique_owner: bool = True) -> None:
        self._storage: Dict[MealPlanId, MealPlan] = {}
        self._enforce_unique_owner = enforce_unique_owner
        self.insert_count = 0
        self.replace_count = 0

    async def find_one_by_owner(self, owner_id: OwnerId) -> Optional[MealPlan]:
        plans = self._owned_by(owner_id)

        if not plans:
            return None
        if len(plans) > 1:
            raise IntegrityFaultError(owner_id.value, "more than one meal plan stored for owner")

        return deepcopy(plans[0])

    async def find_by_id(self, plan_id: MealPlanId) -> Optional[MealPlan]:
        plan = self._storage.get(plan_id)
        return deepcopy(plan) if plan is not None else None

    async def list_by_owner(self, owner_id: OwnerId) -> List[MealPlan]:
        return [deepcopy(plan) for plan in self._owned_by(owner_id)]

    async def insert(self, plan: MealPlan) -> MealPlan:
        if self._enforce_unique_owner and self._owned_by(plan.owner_id):
            raise IntegrityFaultError(
                plan.owner_id.value, "a meal plan already exists for this owner"
            )

        self.insert_count += 1
        self._storage[plan.plan_id] = deepcopy(plan)
        return deepcopy(plan)

    async def replace(self, plan: MealPlan) -> Optional[MealPlan]:
        stored = self._storage.get(plan.plan_id)
        if stored is None:
            return None

        # Identity fields of the stored record win
        stored.name = plan.name
        stored.description = plan.description
        stored.meals = deepcopy(plan.meals)
        stored.date_range = plan.date_range
        stored.updated_at = max(plan.updated_at, stored.created_at)

        self.replace_count += 1
        return deepcopy(stored)

    async def delete_by_id(self, plan_id: MealPlanId) -> bool:
        return self._storage.pop(plan_id, None) is not None

    def _owned_by(self, owner_id: OwnerId) -> List[MealPlan]:
        plans = [plan for plan in self._storage.values() if plan.owner_id == owner_id]
        return sorted(plans, key=lambda plan: plan.created_at)

    def clear(self) -> None:
        """Remove every stored plan and reset the write counters."""
        self._storage.clear()
        self.insert_count = 0
        self.replace_count = 0

    def count(self) -> int:
        return len(self._storage)
