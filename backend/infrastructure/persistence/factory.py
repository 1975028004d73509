"""Repository Factory for Persistence Layer.

Environment-based repository selection.
Strategy:
- .env (runtime): REPOSITORY_BACKEND=mongodb (production persistence)
- .env.test (pytest): REPOSITORY_BACKEND=inmemory (fast, isolated tests)
- Default: inmemory (safe fallback if env vars not set)

Usage:
    from infrastructure.persistence.factory import get_meal_plan_repository

    repo = get_meal_plan_repository()  # Singleton instance
"""

import os
from typing import Optional

from domain.mealplan.core.ports.meal_plan_repository import IMealPlanRepository
from infrastructure.persistence.in_memory.meal_plan_repository import (
    InMemoryMealPlanRepository,
)


def create_meal_plan_repository() -> IMealPlanRepository:
    """Create meal plan repository based on REPOSITORY_BACKEND env var.

    Values:
        - "inmemory": In-memory repository (default, fast, transient)
        - "mongodb": MongoDB repository (persistent, requires MONGODB_URI)

    Raises:
        ValueError: If mongodb selected but MONGODB_URI not set, or the
            backend name is unknown
    """
    mode = os.getenv("REPOSITORY_BACKEND", "inmemory").lower()

    if mode == "mongodb":
        if not os.getenv("MONGODB_URI"):
            raise ValueError(
                "REPOSITORY_BACKEND=mongodb but MONGODB_URI not set. "
                "Set MONGODB_URI in .env or use REPOSITORY_BACKEND=inmemory"
            )

        from infrastructure.persistence.mongodb.meal_plan_repository import (
            MongoMealPlanRepository,
        )

        return MongoMealPlanRepository()

    if mode != "inmemory":
        raise ValueError(f"Unknown REPOSITORY_BACKEND: {mode}. Use 'inmemory' or 'mongodb'")

    return InMemoryMealPlanRepository()


_meal_plan_repository: Optional[IMealPlanRepository] = None


def get_meal_plan_repository() -> IMealPlanRepository:
    """Get singleton meal plan repository instance."""
    global _meal_plan_repository
    if _meal_plan_repository is None:
        _meal_plan_repository = create_meal_plan_repository()
    return _meal_plan_repository


def reset_repository() -> None:
    """Reset singleton repository instance.

    Useful for testing to force re-creation with different env vars.
    """
    global _meal_plan_repository
    _meal_plan_repository = None
