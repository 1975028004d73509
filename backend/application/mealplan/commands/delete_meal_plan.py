"""DeleteMealPlanCommand - remove a plan by id."""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from domain.mealplan.core.exceptions.mealplan_errors import MealPlanNotFoundError
from domain.mealplan.core.ports.meal_plan_repository import IMealPlanRepository
from domain.mealplan.core.value_objects.meal_plan_id import MealPlanId
from domain.mealplan.core.value_objects.owner_id import OwnerId

from ..access import load_plan_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteMealPlanCommand:
    """Command to delete a plan.

    Attributes:
        plan_id: Plan to delete
        requester: Caller identity; None skips the ownership check
    """

    plan_id: MealPlanId
    requester: Optional[OwnerId] = None


class DeleteMealPlanHandler:
    """Handler for DeleteMealPlanCommand.

    Deleting an id that does not exist reports MealPlanNotFoundError rather
    than succeeding silently.
    """

    def __init__(self, repository: IMealPlanRepository):
        self._repository = repository

    async def handle(self, command: DeleteMealPlanCommand) -> List[Any]:
        """
        Returns:
            Domain events raised by the deletion

        Raises:
            MealPlanNotFoundError: If the plan doesn't exist
            ForbiddenError: If the requester does not own the plan
        """
        plan = await load_plan_for(self._repository, command.plan_id, command.requester)

        deleted = await self._repository.delete_by_id(command.plan_id)
        if not deleted:
            # Removed by a concurrent request between lookup and delete
            raise MealPlanNotFoundError(str(command.plan_id))

        plan.mark_deleted()
        logger.info(
            "mealplan.deleted",
            extra={"plan_id": str(plan.plan_id), "owner_id": str(plan.owner_id)},
        )
        return plan.collect_events()
