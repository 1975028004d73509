"""UpdateMealPlanCommand - edit a plan addressed by id."""

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from domain.mealplan.core.entities.meal_plan import MealPlan
from domain.mealplan.core.exceptions.mealplan_errors import (
    InvalidPayloadError,
    MealPlanNotFoundError,
)
from domain.mealplan.core.ports.meal_plan_repository import IMealPlanRepository
from domain.mealplan.core.services.payload_normalizer import (
    normalize_payload,
    parse_description,
    parse_explicit_range,
    parse_name,
)
from domain.mealplan.core.value_objects.meal_plan_id import MealPlanId
from domain.mealplan.core.value_objects.owner_id import OwnerId

from ..access import load_plan_for

UPDATABLE_FIELDS = frozenset({"name", "description", "meals", "dateRange", "startDate", "endDate"})


@dataclass(frozen=True)
class UpdateMealPlanCommand:
    """Command to update a plan by id.

    Attributes:
        plan_id: Plan to update
        requester: Caller identity (must own the plan)
        payload: Any of ``name``, ``description``, ``meals`` (with optional
            range) or a range alone
    """

    plan_id: MealPlanId
    requester: Optional[OwnerId]
    payload: Any


@dataclass(frozen=True)
class UpdateMealPlanResult:
    plan: MealPlan
    events: List[Any] = field(default_factory=list)


class UpdateMealPlanHandler:
    """Handler for UpdateMealPlanCommand.

    ``meals`` replaces the meal list (and range) exactly as an upsert would;
    a range without meals must still contain every planned meal; ``name``
    renames the plan and ``description`` replaces its description.
    At least one updatable field must be present.
    """

    def __init__(self, repository: IMealPlanRepository):
        self._repository = repository

    async def handle(self, command: UpdateMealPlanCommand) -> UpdateMealPlanResult:
        """
        Handle plan update.

        Raises:
            InvalidPayloadError: If no updatable field is present or a field is invalid
            MealPlanNotFoundError: If the plan doesn't exist
            ForbiddenError: If the requester does not own the plan
        """
        payload = self._validate(command.payload)

        plan = await load_plan_for(self._repository, command.plan_id, command.requester)

        if "meals" in payload:
            normalized = normalize_payload(payload)
            plan.replace_contents(normalized.meals, normalized.date_range)
        else:
            new_range = parse_explicit_range(payload)
            if new_range is not None:
                try:
                    plan.replace_contents(plan.meals, new_range)
                except ValueError as e:
                    raise InvalidPayloadError(str(e), field="dateRange") from e

        if "name" in payload:
            plan.rename(parse_name(payload["name"]))

        if "description" in payload:
            plan.describe(parse_description(payload["description"]))

        events = plan.collect_events()
        persisted = await self._repository.replace(plan)
        if persisted is None:
            raise MealPlanNotFoundError(str(command.plan_id))

        return UpdateMealPlanResult(plan=persisted, events=events)

    @staticmethod
    def _validate(payload: Any) -> Mapping[str, Any]:
        if payload is None:
            raise InvalidPayloadError("payload is missing")
        if not isinstance(payload, Mapping):
            raise InvalidPayloadError(
                f"payload must be a JSON object, got {type(payload).__name__}"
            )

        unknown = sorted(set(payload.keys()) - UPDATABLE_FIELDS)
        if unknown:
            raise InvalidPayloadError(f"unknown fields: {', '.join(unknown)}")

        if not payload:
            raise InvalidPayloadError(
                "at least one of name, description, meals or dateRange is required"
            )

        return payload
