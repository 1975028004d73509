"""Meal plan domain exceptions.

Each error carries a stable ``code`` so the REST layer can map it to a
distinct HTTP status and error payload without inspecting messages.
"""

from typing import Optional


class MealPlanDomainError(Exception):
    """Base exception for meal plan domain errors."""

    code = "meal_plan_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnauthenticatedError(MealPlanDomainError):
    """No owner identity could be resolved for the caller."""

    code = "unauthenticated"

    def __init__(self, reason: str = "No authenticated owner identity"):
        self.reason = reason
        super().__init__(reason)


class InvalidPayloadError(MealPlanDomainError):
    """Meal plan payload is missing, malformed or violates plan invariants."""

    code = "invalid_payload"

    def __init__(self, reason: str, field: Optional[str] = None):
        """Initialize with failure reason.

        Args:
            reason: Human-readable reason for failure
            field: Offending payload field, when known
        """
        self.reason = reason
        self.field = field
        message = f"Invalid meal plan payload: {reason}"
        if field:
            message = f"Invalid meal plan payload at '{field}': {reason}"
        super().__init__(message)


class ForbiddenError(MealPlanDomainError):
    """Caller does not own the meal plan it tries to access."""

    code = "forbidden"

    def __init__(self, plan_id: str, owner_id: str):
        self.plan_id = plan_id
        self.owner_id = owner_id
        super().__init__(f"Meal plan {plan_id} does not belong to {owner_id}")


class MealPlanNotFoundError(MealPlanDomainError):
    """Meal plan was not found."""

    code = "not_found"

    def __init__(self, identifier: str):
        """Initialize with plan identifier.

        Args:
            identifier: Plan ID or owner ID that was looked up
        """
        self.identifier = identifier
        super().__init__(f"Meal plan not found: {identifier}")


class PersistenceFaultError(MealPlanDomainError):
    """Store unreachable or operation failed."""

    code = "persistence_fault"

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Persistence fault during {operation}: {reason}")


class IntegrityFaultError(PersistenceFaultError):
    """More than one meal plan exists (or would exist) for one owner."""

    code = "integrity_fault"

    def __init__(self, owner_id: str, reason: str):
        self.owner_id = owner_id
        super().__init__("owner uniqueness check", f"{reason} (owner {owner_id})")
