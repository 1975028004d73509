"""Meal plan domain events."""

from .meal_plan_events import MealPlanCreated, MealPlanDeleted, MealPlanUpdated

__all__ = [
    "MealPlanCreated",
    "MealPlanUpdated",
    "MealPlanDeleted",
]
