"""Meal plan ports."""

from .identity_resolver import IIdentityResolver, RequestIdentityContext
from .meal_plan_repository import IMealPlanRepository

__all__ = [
    "IIdentityResolver",
    "IMealPlanRepository",
    "RequestIdentityContext",
]
