"""MongoDB repository implementations."""

from .base import MongoBaseRepository
from .meal_plan_repository import MongoMealPlanRepository

__all__ = [
    "MongoBaseRepository",
    "MongoMealPlanRepository",
]
