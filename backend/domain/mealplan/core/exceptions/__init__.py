"""Domain exceptions for meal plans."""

from .mealplan_errors import (
    ForbiddenError,
    IntegrityFaultError,
    InvalidPayloadError,
    MealPlanDomainError,
    MealPlanNotFoundError,
    PersistenceFaultError,
    UnauthenticatedError,
)

__all__ = [
    "MealPlanDomainError",
    "UnauthenticatedError",
    "InvalidPayloadError",
    "ForbiddenError",
    "MealPlanNotFoundError",
    "PersistenceFaultError",
    "IntegrityFaultError",
]
