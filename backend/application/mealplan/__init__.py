"""Meal plan application layer: commands, queries and the upsert service."""

from .service import MealPlanUpsertService

__all__ = ["MealPlanUpsertService"]
