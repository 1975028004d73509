"""In-memory persistence implementations."""

from infrastructure.persistence.in_memory.meal_plan_repository import (
    InMemoryMealPlanRepository,
)

__all__ = ["InMemoryMealPlanRepository"]
