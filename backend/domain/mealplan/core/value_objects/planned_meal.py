"""PlannedMeal value object - canonical meal entry."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class PlannedMeal:
    """One recipe planned on one date for a number of servings.

    This is the canonical meal entry every accepted payload shape is
    normalized into.

    Attributes:
        recipe_id: Identifier of the referenced recipe
        date: Calendar date the recipe is planned for
        servings: Number of servings (>= 1)
    """

    recipe_id: str
    date: date
    servings: int = 1

    def __post_init__(self) -> None:
        """Validate meal entry."""
        if not isinstance(self.recipe_id, str) or not self.recipe_id.strip():
            raise ValueError("Recipe id cannot be empty")

        if not isinstance(self.date, date):
            raise ValueError(f"Meal date must be a date, got {type(self.date).__name__}")

        # bool is an int subclass
        if isinstance(self.servings, bool) or not isinstance(self.servings, int):
            raise ValueError(f"Servings must be an integer, got {self.servings!r}")

        if self.servings < 1:
            raise ValueError(f"Servings must be at least 1, got {self.servings}")
