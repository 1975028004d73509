"""Loading a plan on behalf of a caller."""

from typing import Optional

from domain.mealplan.core.entities.meal_plan import MealPlan
from domain.mealplan.core.exceptions.mealplan_errors import (
    ForbiddenError,
    MealPlanNotFoundError,
)
from domain.mealplan.core.ports.meal_plan_repository import IMealPlanRepository
from domain.mealplan.core.value_objects.meal_plan_id import MealPlanId
from domain.mealplan.core.value_objects.owner_id import OwnerId


async def load_plan_for(
    repository: IMealPlanRepository,
    plan_id: MealPlanId,
    requester: Optional[OwnerId],
) -> MealPlan:
    """Load a plan by id and check the requester owns it.

    Args:
        repository: Meal plan repository
        plan_id: Plan to load
        requester: Caller identity; None skips the ownership check

    Raises:
        MealPlanNotFoundError: If no plan has this id
        ForbiddenError: If the plan belongs to someone else
    """
    plan = await repository.find_by_id(plan_id)
    if plan is None:
        raise MealPlanNotFoundError(str(plan_id))

    if requester is not None and not plan.is_owned_by(requester):
        raise ForbiddenError(str(plan_id), str(requester))

    return plan
