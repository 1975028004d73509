"""Meal plan commands."""

from .add_recipe import AddRecipeCommand, AddRecipeHandler, AddRecipeResult
from .delete_meal_plan import DeleteMealPlanCommand, DeleteMealPlanHandler
from .update_meal_plan import (
    UpdateMealPlanCommand,
    UpdateMealPlanHandler,
    UpdateMealPlanResult,
)
from .upsert_meal_plan import (
    UpsertMealPlanCommand,
    UpsertMealPlanHandler,
    UpsertMealPlanResult,
)

__all__ = [
    "AddRecipeCommand",
    "AddRecipeHandler",
    "AddRecipeResult",
    "DeleteMealPlanCommand",
    "DeleteMealPlanHandler",
    "UpdateMealPlanCommand",
    "UpdateMealPlanHandler",
    "UpdateMealPlanResult",
    "UpsertMealPlanCommand",
    "UpsertMealPlanHandler",
    "UpsertMealPlanResult",
]
