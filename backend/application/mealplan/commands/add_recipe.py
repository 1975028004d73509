"""AddRecipeCommand - append one recipe to a plan."""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from domain.mealplan.core.entities.meal_plan import MealPlan
from domain.mealplan.core.exceptions.mealplan_errors import MealPlanNotFoundError
from domain.mealplan.core.ports.meal_plan_repository import IMealPlanRepository
from domain.mealplan.core.services.payload_normalizer import normalize_meal_entry
from domain.mealplan.core.value_objects.meal_plan_id import MealPlanId
from domain.mealplan.core.value_objects.owner_id import OwnerId

from ..access import load_plan_for


@dataclass(frozen=True)
class AddRecipeCommand:
    """Command to plan one more recipe.

    Attributes:
        plan_id: Target plan
        requester: Caller identity (must own the plan)
        payload: ``{"recipeId", "date", "servings"?}``
    """

    plan_id: MealPlanId
    requester: Optional[OwnerId]
    payload: Any


@dataclass(frozen=True)
class AddRecipeResult:
    plan: MealPlan
    events: List[Any] = field(default_factory=list)


class AddRecipeHandler:
    """Handler for AddRecipeCommand.

    The new meal is appended after the existing ones. A date outside the
    plan's range widens the range to include it.
    """

    def __init__(self, repository: IMealPlanRepository):
        self._repository = repository

    async def handle(self, command: AddRecipeCommand) -> AddRecipeResult:
        """
        Raises:
            InvalidPayloadError: If the meal entry is invalid
            MealPlanNotFoundError: If the plan doesn't exist
            ForbiddenError: If the requester does not own the plan
        """
        meal = normalize_meal_entry(command.payload, "recipe")

        plan = await load_plan_for(self._repository, command.plan_id, command.requester)
        plan.add_meal(meal)

        events = plan.collect_events()
        persisted = await self._repository.replace(plan)
        if persisted is None:
            raise MealPlanNotFoundError(str(command.plan_id))

        return AddRecipeResult(plan=persisted, events=events)
