"""Meal plan queries - read-only lookups."""

from dataclasses import dataclass
from typing import List, Optional
import logging

from domain.mealplan.core.entities.meal_plan import MealPlan
from domain.mealplan.core.exceptions.mealplan_errors import MealPlanNotFoundError
from domain.mealplan.core.ports.meal_plan_repository import IMealPlanRepository
from domain.mealplan.core.value_objects.meal_plan_id import MealPlanId
from domain.mealplan.core.value_objects.owner_id import OwnerId

from ..access import load_plan_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GetMealPlanByOwnerQuery:
    """
    Query: Get the single meal plan of an owner.

    Never creates a plan.

    Attributes:
        owner_id: Owner whose plan to load
    """

    owner_id: OwnerId


@dataclass(frozen=True)
class GetMealPlanQuery:
    """
    Query: Get a meal plan by id.

    Attributes:
        plan_id: Plan to load
        requester: Caller identity; None skips the ownership check
    """

    plan_id: MealPlanId
    requester: Optional[OwnerId] = None


@dataclass(frozen=True)
class ListMealPlansQuery:
    owner_id: OwnerId


class GetMealPlanByOwnerQueryHandler:
    """Handler for GetMealPlanByOwnerQuery."""

    def __init__(self, repository: IMealPlanRepository):
        self._repository = repository

    async def handle(self, query: GetMealPlanByOwnerQuery) -> MealPlan:
        """
        Raises:
            MealPlanNotFoundError: If the owner has no plan
            IntegrityFaultError: If the owner has more than one plan
        """
        plan = await self._repository.find_one_by_owner(query.owner_id)

        if plan is None:
            logger.debug("Meal plan not found", extra={"owner_id": str(query.owner_id)})
            raise MealPlanNotFoundError(str(query.owner_id))

        return plan


class GetMealPlanQueryHandler:
    """Handler for GetMealPlanQuery."""

    def __init__(self, repository: IMealPlanRepository):
        self._repository = repository

    async def handle(self, query: GetMealPlanQuery) -> MealPlan:
        return await load_plan_for(self._repository, query.plan_id, query.requester)


class ListMealPlansQueryHandler:
    """Handler for ListMealPlansQuery.

    Only the owner's own plans are listed, so the result has at most one
    element unless legacy data is duplicated.
    """

    def __init__(self, repository: IMealPlanRepository):
        self._repository = repository

    async def handle(self, query: ListMealPlansQuery) -> List[MealPlan]:
        plans = await self._repository.list_by_owner(query.owner_id)

        logger.debug(
            "Meal plans listed",
            extra={"owner_id": str(query.owner_id), "plan_count": len(plans)},
        )
        return plans
