"""Shared test fixtures.

Loads ``.env`` then ``.env.test`` (if present) and forces in-memory
adapters so the suite never needs external services, unless a test run
explicitly opts into MongoDB with REPOSITORY_BACKEND=mongodb.
"""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path
from typing import Any, Dict, Generator

import pytest
from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)

os.environ.setdefault("REPOSITORY_BACKEND", "inmemory")
os.environ.setdefault("USER_REPOSITORY", "inmemory")

from domain.mealplan.core.value_objects.owner_id import OwnerId  # noqa: E402
from infrastructure.events.in_memory_bus import InMemoryEventBus  # noqa: E402
from infrastructure.identity.resolvers import Auth0SubjectResolver  # noqa: E402
from infrastructure.persistence.in_memory.meal_plan_repository import (  # noqa: E402
    InMemoryMealPlanRepository,
)
from infrastructure.persistence.factory import reset_repository  # noqa: E402
from infrastructure.user.repository_factory import reset_user_repository  # noqa: E402
from application.mealplan.service import MealPlanUpsertService  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_singletons() -> Generator[None, None, None]:
    """Drop factory singletons so env changes made by a test take effect."""
    reset_repository()
    reset_user_repository()
    yield
    reset_repository()
    reset_user_repository()


@pytest.fixture
def owner() -> OwnerId:
    return OwnerId("auth0|U1")


@pytest.fixture
def other_owner() -> OwnerId:
    return OwnerId("auth0|U2")


@pytest.fixture
def repository() -> InMemoryMealPlanRepository:
    return InMemoryMealPlanRepository()


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture
def service(
    repository: InMemoryMealPlanRepository, event_bus: InMemoryEventBus
) -> MealPlanUpsertService:
    return MealPlanUpsertService(
        repository=repository,
        identity_resolver=Auth0SubjectResolver(),
        event_bus=event_bus,
    )


@pytest.fixture
def flat_payload() -> Dict[str, Any]:
    """One meal on 2024-02-01, explicit single-day range."""
    return {
        "meals": [{"recipeId": "R1", "date": "2024-02-01", "servings": 2}],
        "dateRange": {"start": "2024-02-01", "end": "2024-02-01"},
    }


@pytest.fixture
def feb_first() -> date:
    return date(2024, 2, 1)
