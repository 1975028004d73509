"""UpsertMealPlanCommand - save the owner's meal plan, creating it on first save."""

import logging
from dataclasses import dataclass, field
from typing import Any, List

from domain.mealplan.core.entities.meal_plan import MealPlan
from domain.mealplan.core.exceptions.mealplan_errors import PersistenceFaultError
from domain.mealplan.core.ports.meal_plan_repository import IMealPlanRepository
from domain.mealplan.core.services.payload_normalizer import normalize_payload
from domain.mealplan.core.value_objects.owner_id import OwnerId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpsertMealPlanCommand:
    """Command to save an owner's meal plan.

    Attributes:
        owner_id: Resolved owner identity
        payload: Decoded request body, flat list or nested date map
    """

    owner_id: OwnerId
    payload: Any


@dataclass(frozen=True)
class UpsertMealPlanResult:
    """Result of an upsert.

    Attributes:
        plan: Plan as persisted, including its id
        created: True if the plan was created, False if an existing one was updated
        events: Domain events raised by the change, ready to publish
    """

    plan: MealPlan
    created: bool
    events: List[Any] = field(default_factory=list)


class UpsertMealPlanHandler:
    """Handler for UpsertMealPlanCommand.

    Steps:
    1. Normalize the payload into canonical meals and a date range
    2. Look up the owner's plan (more than one is an integrity fault)
    3. Found: replace meals and date range in place, keeping id, owner,
       name and description
    4. Not found: create a plan with a fresh id
    5. Return the persisted plan

    Exactly one write (replace or insert) happens per call. Invalid payloads
    fail before the store is touched.
    """

    def __init__(self, repository: IMealPlanRepository):
        self._repository = repository

    async def handle(self, command: UpsertMealPlanCommand) -> UpsertMealPlanResult:
        """
        Handle meal plan upsert.

        Args:
            command: UpsertMealPlanCommand with owner and payload

        Returns:
            UpsertMealPlanResult with persisted plan

        Raises:
            InvalidPayloadError: If payload is missing or malformed
            IntegrityFaultError: If the owner has several plans, or a
                concurrent first save created one in the meantime
            PersistenceFaultError: If the store fails
        """
        normalized = normalize_payload(command.payload)

        existing = await self._repository.find_one_by_owner(command.owner_id)

        if existing is None:
            plan = MealPlan.create(
                owner_id=command.owner_id,
                meals=normalized.meals,
                date_range=normalized.date_range,
                name=normalized.name,
                description=normalized.description,
            )
            events = plan.collect_events()
            persisted = await self._repository.insert(plan)

            logger.info(
                "mealplan.created",
                extra={
                    "plan_id": str(persisted.plan_id),
                    "owner_id": str(command.owner_id),
                    "meal_count": len(persisted.meals),
                },
            )
            return UpsertMealPlanResult(plan=persisted, created=True, events=events)

        existing.replace_contents(normalized.meals, normalized.date_range)
        events = existing.collect_events()
        replaced = await self._repository.replace(existing)

        if replaced is None:
            raise PersistenceFaultError(
                "replace", f"meal plan {existing.plan_id} disappeared during update"
            )

        logger.info(
            "mealplan.replaced",
            extra={
                "plan_id": str(replaced.plan_id),
                "owner_id": str(command.owner_id),
                "meal_count": len(replaced.meals),
            },
        )
        return UpsertMealPlanResult(plan=replaced, created=False, events=events)
