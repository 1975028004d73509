"""Meal plan queries."""

from .get_meal_plan import (
    GetMealPlanByOwnerQuery,
    GetMealPlanByOwnerQueryHandler,
    GetMealPlanQuery,
    GetMealPlanQueryHandler,
    ListMealPlansQuery,
    ListMealPlansQueryHandler,
)

__all__ = [
    "GetMealPlanByOwnerQuery",
    "GetMealPlanByOwnerQueryHandler",
    "GetMealPlanQuery",
    "GetMealPlanQueryHandler",
    "ListMealPlansQuery",
    "ListMealPlansQueryHandler",
]
