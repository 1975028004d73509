"""MealPlanId value object - unique identifier for meal plans."""

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True)
class MealPlanId:
    """Unique identifier for a meal plan.

    Immutable value object wrapping the plan's UUID. Assigned once at
    creation and never changed afterwards.
    """

    value: UUID

    @staticmethod
    def generate() -> "MealPlanId":
        """Generate a new unique meal plan ID.

        Returns:
            MealPlanId: New ID with random UUID v4
        """
        return MealPlanId(value=uuid4())

    @staticmethod
    def from_string(id_str: str) -> "MealPlanId":
        """Create MealPlanId from string representation.

        Args:
            id_str: String representation of UUID

        Returns:
            MealPlanId: ID from parsed UUID

        Raises:
            ValueError: If string is not a valid UUID
        """
        try:
            return MealPlanId(value=UUID(id_str))
        except (ValueError, AttributeError, TypeError) as e:
            raise ValueError(f"Invalid meal plan ID format: {id_str}") from e

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"MealPlanId(value={self.value})"
