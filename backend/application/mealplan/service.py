"""MealPlanUpsertService - entry point for meal plan operations.

Wires identity resolution, the command/query handlers and event
publishing together. Every operation runs independently; nothing is
shared between calls besides the injected adapters.
"""

import logging
from typing import Any, List, Optional, Sequence

from domain.mealplan.core.entities.meal_plan import MealPlan
from domain.mealplan.core.exceptions.mealplan_errors import (
    MealPlanNotFoundError,
    UnauthenticatedError,
)
from domain.mealplan.core.ports.identity_resolver import (
    IIdentityResolver,
    RequestIdentityContext,
)
from domain.mealplan.core.ports.meal_plan_repository import IMealPlanRepository
from domain.mealplan.core.value_objects.meal_plan_id import MealPlanId
from domain.mealplan.core.value_objects.owner_id import OwnerId
from domain.shared.ports.event_bus import IEventBus

from .commands import (
    AddRecipeCommand,
    AddRecipeHandler,
    DeleteMealPlanCommand,
    DeleteMealPlanHandler,
    UpdateMealPlanCommand,
    UpdateMealPlanHandler,
    UpsertMealPlanCommand,
    UpsertMealPlanHandler,
    UpsertMealPlanResult,
)
from .queries import (
    GetMealPlanByOwnerQuery,
    GetMealPlanByOwnerQueryHandler,
    GetMealPlanQuery,
    GetMealPlanQueryHandler,
    ListMealPlansQuery,
    ListMealPlansQueryHandler,
)

logger = logging.getLogger(__name__)


class MealPlanUpsertService:
    """Meal plan operations on behalf of a resolved owner.

    Args:
        repository: Meal plan repository port
        identity_resolver: Resolves the owner identity of a request
        event_bus: Optional bus; domain events are published after each write
    """

    def __init__(
        self,
        repository: IMealPlanRepository,
        identity_resolver: IIdentityResolver,
        event_bus: Optional[IEventBus] = None,
    ):
        self._repository = repository
        self._identity_resolver = identity_resolver
        self._event_bus = event_bus

        self._upsert = UpsertMealPlanHandler(repository)
        self._update = UpdateMealPlanHandler(repository)
        self._add_recipe = AddRecipeHandler(repository)
        self._delete = DeleteMealPlanHandler(repository)
        self._get_by_owner = GetMealPlanByOwnerQueryHandler(repository)
        self._get = GetMealPlanQueryHandler(repository)
        self._list = ListMealPlansQueryHandler(repository)

    async def resolve_owner(self, context: RequestIdentityContext) -> OwnerId:
        """Resolve the owner identity of a request.

        Raises:
            UnauthenticatedError: If no identity can be resolved
        """
        return await self._identity_resolver.resolve_owner_id(context)

    async def upsert_meal_plan(self, owner_id: Optional[OwnerId], payload: Any) -> UpsertMealPlanResult:
        """Create the owner's plan or replace the contents of the existing one.

        Raises:
            UnauthenticatedError: If owner_id is None
            InvalidPayloadError: If the payload is missing or malformed
            IntegrityFaultError: If the owner has more than one plan
            PersistenceFaultError: If the store fails
        """
        owner = self._require_owner(owner_id)

        result = await self._upsert.handle(UpsertMealPlanCommand(owner_id=owner, payload=payload))
        await self._publish(result.events)
        return result

    async def get_meal_plan_by_owner(self, owner_id: Optional[OwnerId]) -> MealPlan:
        """Return the owner's plan; never creates one.

        Raises:
            UnauthenticatedError: If owner_id is None
            MealPlanNotFoundError: If the owner has no plan
        """
        owner = self._require_owner(owner_id)
        return await self._get_by_owner.handle(GetMealPlanByOwnerQuery(owner_id=owner))

    async def get_meal_plan(self, plan_id: str, requester: Optional[OwnerId]) -> MealPlan:
        owner = self._require_owner(requester)
        return await self._get.handle(
            GetMealPlanQuery(plan_id=self._parse_plan_id(plan_id), requester=owner)
        )

    async def list_meal_plans(self, requester: Optional[OwnerId]) -> List[MealPlan]:
        owner = self._require_owner(requester)
        return await self._list.handle(ListMealPlansQuery(owner_id=owner))

    async def update_meal_plan(self, plan_id: str, requester: Optional[OwnerId], payload: Any) -> MealPlan:
        """Update name, description and/or meals of a plan the requester owns.

        Raises:
            UnauthenticatedError: If requester is None
            InvalidPayloadError: If the payload has nothing to update or is malformed
            MealPlanNotFoundError: If the plan doesn't exist
            ForbiddenError: If the plan belongs to someone else
        """
        owner = self._require_owner(requester)

        result = await self._update.handle(
            UpdateMealPlanCommand(
                plan_id=self._parse_plan_id(plan_id), requester=owner, payload=payload
            )
        )
        await self._publish(result.events)
        return result.plan

    async def add_recipe(self, plan_id: str, requester: Optional[OwnerId], payload: Any) -> MealPlan:
        """Append one recipe to a plan the requester owns."""
        owner = self._require_owner(requester)

        result = await self._add_recipe.handle(
            AddRecipeCommand(plan_id=self._parse_plan_id(plan_id), requester=owner, payload=payload)
        )
        await self._publish(result.events)
        return result.plan

    async def delete_meal_plan(self, plan_id: str, requester: Optional[OwnerId] = None) -> None:
        """Delete a plan by id.

        Ownership is only checked when a requester is given.

        Raises:
            MealPlanNotFoundError: If no plan has this id
            ForbiddenError: If the plan belongs to someone else
        """
        events = await self._delete.handle(
            DeleteMealPlanCommand(plan_id=self._parse_plan_id(plan_id), requester=requester)
        )
        await self._publish(events)

    @staticmethod
    def _require_owner(owner_id: Optional[OwnerId]) -> OwnerId:
        if owner_id is None:
            raise UnauthenticatedError()
        return owner_id

    @staticmethod
    def _parse_plan_id(plan_id: str) -> MealPlanId:
        # A malformed id cannot name an existing plan
        try:
            return MealPlanId.from_string(plan_id)
        except ValueError as e:
            raise MealPlanNotFoundError(plan_id) from e

    async def _publish(self, events: Sequence[Any]) -> None:
        if self._event_bus is None:
            return
        for event in events:
            await self._event_bus.publish(event)
