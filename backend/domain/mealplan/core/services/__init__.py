"""Meal plan domain services."""

from .payload_normalizer import (
    NormalizedMealPlan,
    normalize_meal_entry,
    normalize_payload,
    parse_date,
    parse_description,
    parse_explicit_range,
    parse_name,
)

__all__ = [
    "NormalizedMealPlan",
    "normalize_payload",
    "normalize_meal_entry",
    "parse_date",
    "parse_description",
    "parse_explicit_range",
    "parse_name",
]
