"""Meal plan entities."""

from .meal_plan import MealPlan

__all__ = ["MealPlan"]
