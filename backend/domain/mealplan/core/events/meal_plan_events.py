"""Meal plan domain events."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from domain.shared.events import DomainEvent
from domain.mealplan.core.value_objects.meal_plan_id import MealPlanId
from domain.mealplan.core.value_objects.owner_id import OwnerId


@dataclass(frozen=True)
class MealPlanCreated(DomainEvent):
    """Domain event: a meal plan was created on first save for an owner.

    Attributes:
        plan_id: New plan identifier
        owner_id: Owner of the plan
        meal_count: Number of planned meals at creation
    """

    plan_id: MealPlanId
    owner_id: OwnerId
    meal_count: int

    @classmethod
    def create(cls, plan_id: MealPlanId, owner_id: OwnerId, meal_count: int) -> "MealPlanCreated":
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            plan_id=plan_id,
            owner_id=owner_id,
            meal_count=meal_count,
        )


@dataclass(frozen=True)
class MealPlanUpdated(DomainEvent):
    """Domain event: contents of an existing meal plan were replaced.

    Attributes:
        plan_id: Plan identifier
        owner_id: Owner of the plan
        meal_count: Number of planned meals after the update
    """

    plan_id: MealPlanId
    owner_id: OwnerId
    meal_count: int

    @classmethod
    def create(cls, plan_id: MealPlanId, owner_id: OwnerId, meal_count: int) -> "MealPlanUpdated":
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            plan_id=plan_id,
            owner_id=owner_id,
            meal_count=meal_count,
        )


@dataclass(frozen=True)
class MealPlanDeleted(DomainEvent):
    """Domain event: a meal plan was deleted."""

    plan_id: MealPlanId
    owner_id: OwnerId

    @classmethod
    def create(cls, plan_id: MealPlanId, owner_id: OwnerId) -> "MealPlanDeleted":
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            plan_id=plan_id,
            owner_id=owner_id,
        )
