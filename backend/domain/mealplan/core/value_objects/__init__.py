"""Meal plan value objects."""

from .date_range import DateRange
from .meal_plan_id import MealPlanId
from .owner_id import OwnerId
from .planned_meal import PlannedMeal

__all__ = [
    "DateRange",
    "MealPlanId",
    "OwnerId",
    "PlannedMeal",
]
