"""MealPlan entity - aggregate root."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence

from domain.mealplan.core.value_objects.date_range import DateRange
from domain.mealplan.core.value_objects.meal_plan_id import MealPlanId
from domain.mealplan.core.value_objects.owner_id import OwnerId
from domain.mealplan.core.value_objects.planned_meal import PlannedMeal


@dataclass
class MealPlan:
    """MealPlan aggregate root.

    Represents the single meal plan of one owner: a date range and the
    recipes planned inside it.

    Invariants:
    - plan_id and owner_id are immutable once created
    - every planned meal's date lies within date_range
    - updated_at is never before created_at

    Examples:
        >>> plan = MealPlan.create(
        ...     owner_id=OwnerId("auth0|123"),
        ...     meals=[PlannedMeal("R1", date(2024, 2, 1), 2)],
        ...     date_range=DateRange(date(2024, 2, 1), date(2024, 2, 1)),
        ... )
        >>> len(plan.meals)
        1
        >>> [type(e).__name__ for e in plan.collect_events()]
        ['MealPlanCreated']
    """

    plan_id: MealPlanId
    owner_id: OwnerId
    date_range: DateRange
    meals: List[PlannedMeal]
    created_at: datetime
    updated_at: datetime
    name: Optional[str] = None
    description: Optional[str] = None
    _events: List[Any] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.meals = list(self.meals)
        self._check_meals_within_range(self.meals, self.date_range)

        if self.updated_at < self.created_at:
            raise ValueError(
                f"updated_at cannot be before created_at: {self.updated_at} < {self.created_at}"
            )

    @staticmethod
    def create(
        owner_id: OwnerId,
        meals: Sequence[PlannedMeal],
        date_range: DateRange,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> "MealPlan":
        """Factory method to create a new meal plan with a fresh id.

        Args:
            owner_id: Resolved owner identity
            meals: Canonical meal entries
            date_range: Range bounding the plan
            name: Optional display name
            description: Optional free text shown with the plan

        Returns:
            New MealPlan with a MealPlanCreated event

        Raises:
            ValueError: If a meal falls outside date_range
        """
        from domain.mealplan.core.events.meal_plan_events import MealPlanCreated

        now = datetime.now(timezone.utc)
        plan = MealPlan(
            plan_id=MealPlanId.generate(),
            owner_id=owner_id,
            date_range=date_range,
            meals=list(meals),
            created_at=now,
            updated_at=now,
            name=name,
            description=description,
        )
        plan._add_event(MealPlanCreated.create(plan.plan_id, owner_id, len(plan.meals)))
        return plan

    def replace_contents(self, meals: Sequence[PlannedMeal], date_range: DateRange) -> None:
        """Overwrite meals and date range in place.

        Meals are fully replaced, never merged or appended. The plan id and
        owner stay untouched.

        Raises:
            ValueError: If a meal falls outside date_range
        """
        from domain.mealplan.core.events.meal_plan_events import MealPlanUpdated

        new_meals = list(meals)
        self._check_meals_within_range(new_meals, date_range)

        self.meals = new_meals
        self.date_range = date_range
        self._touch()
        self._add_event(MealPlanUpdated.create(self.plan_id, self.owner_id, len(self.meals)))

    def rename(self, name: Optional[str]) -> None:
        from domain.mealplan.core.events.meal_plan_events import MealPlanUpdated

        self.name = name
        self._touch()
        self._add_event(MealPlanUpdated.create(self.plan_id, self.owner_id, len(self.meals)))

    def describe(self, description: Optional[str]) -> None:
        from domain.mealplan.core.events.meal_plan_events import MealPlanUpdated

        self.description = description
        self._touch()
        self._add_event(MealPlanUpdated.create(self.plan_id, self.owner_id, len(self.meals)))

    def add_meal(self, meal: PlannedMeal) -> None:
        """Append one planned meal, widening the date range when needed."""
        from domain.mealplan.core.events.meal_plan_events import MealPlanUpdated

        self.date_range = self.date_range.extended_to(meal.date)
        self.meals.append(meal)
        self._touch()
        self._add_event(MealPlanUpdated.create(self.plan_id, self.owner_id, len(self.meals)))

    def mark_deleted(self) -> None:
        from domain.mealplan.core.events.meal_plan_events import MealPlanDeleted

        self._add_event(MealPlanDeleted.create(self.plan_id, self.owner_id))

    def is_owned_by(self, owner_id: OwnerId) -> bool:
        return self.owner_id == owner_id

    def _touch(self) -> None:
        now = datetime.now(timezone.utc)
        # Clock skew between app instances must not break the ordering invariant
        self.updated_at = max(now, self.created_at)

    @staticmethod
    def _check_meals_within_range(meals: Sequence[PlannedMeal], date_range: DateRange) -> None:
        for meal in meals:
            if not date_range.contains(meal.date):
                raise ValueError(
                    f"Meal for recipe {meal.recipe_id} on {meal.date.isoformat()} is outside "
                    f"plan range {date_range.start.isoformat()}..{date_range.end.isoformat()}"
                )

    def _add_event(self, event: Any) -> None:
        self._events.append(event)

    def collect_events(self) -> List[Any]:
        """Collect and clear domain events.

        Returns:
            List of domain events that occurred since the last collection
        """
        events = self._events.copy()
        self._events.clear()
        return events

    def __eq__(self, other: object) -> bool:
        """Equality based on plan_id (aggregate identity)."""
        if not isinstance(other, MealPlan):
            return False
        return self.plan_id == other.plan_id

    def __hash__(self) -> int:
        return hash(self.plan_id)
