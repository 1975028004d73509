"""Meal plan event handlers."""

from .meal_plan_event_logger import MealPlanEventLogger

__all__ = ["MealPlanEventLogger"]
