"""Meal plan payload normalization.

Two payload shapes have been sent by clients over time:

Flat list (canonical)::

    {
        "name": "Week 6",
        "description": "Batch cooking week",
        "meals": [{"recipeId": "R1", "date": "2024-02-01", "servings": 2}],
        "dateRange": {"start": "2024-02-01", "end": "2024-02-07"}
    }

Nested date map (accepted through the adapter below)::

    {"2024-02-01": {"breakfast": {"_id": "R3", "servings": 4}}}

The nested map may also be sent under ``"meals"``. Both shapes end up as a
list of PlannedMeal plus a DateRange; only the flat shape is ever stored.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, List, Mapping, Optional, Tuple

from domain.mealplan.core.exceptions.mealplan_errors import InvalidPayloadError
from domain.mealplan.core.value_objects.date_range import DateRange
from domain.mealplan.core.value_objects.planned_meal import PlannedMeal

# Top-level keys that only exist in the flat shape
FLAT_SHAPE_KEYS = frozenset({"meals", "dateRange", "startDate", "endDate", "name", "description"})

# Keys a recipe snapshot may carry its id under, in lookup order
RECIPE_ID_KEYS = ("_id", "id", "recipeId")

DEFAULT_SERVINGS = 1


@dataclass(frozen=True)
class NormalizedMealPlan:
    """Payload reduced to canonical meal plan fields.

    Attributes:
        meals: Canonical meal entries, in payload order (date order for the nested shape)
        date_range: Explicit range, or the one derived from the meal dates
        name: Optional display name (flat shape only)
        description: Optional free text (flat shape only)
    """

    meals: List[PlannedMeal]
    date_range: DateRange
    name: Optional[str] = None
    description: Optional[str] = None


def normalize_payload(payload: Any) -> NormalizedMealPlan:
    """Normalize a meal plan payload of either accepted shape.

    Args:
        payload: Decoded JSON body

    Returns:
        NormalizedMealPlan: Canonical meals and date range

    Raises:
        InvalidPayloadError: If the payload is missing, of an unknown shape,
            carries an unparseable date, or has a meal outside its explicit range

    Examples:
        >>> plan = normalize_payload({"2024-02-01": {"breakfast": {"_id": "R3", "servings": 4}}})
        >>> plan.meals
        [PlannedMeal(recipe_id='R3', date=datetime.date(2024, 2, 1), servings=4)]
    """
    if payload is None:
        raise InvalidPayloadError("payload is missing")

    if not isinstance(payload, Mapping):
        raise InvalidPayloadError(
            f"payload must be a JSON object, got {type(payload).__name__}"
        )

    if not payload:
        raise InvalidPayloadError("payload is empty")

    if "meals" in payload:
        meals_value = payload["meals"]
        if isinstance(meals_value, list):
            meals = [normalize_meal_entry(item, f"meals[{i}]") for i, item in enumerate(meals_value)]
            day_keys: List[date] = [meal.date for meal in meals]
        elif isinstance(meals_value, Mapping):
            meals, day_keys = _flatten_date_map(meals_value, "meals")
        else:
            raise InvalidPayloadError("must be a list of meals or a date map", field="meals")

        explicit_range = parse_explicit_range(payload)
        name = parse_name(payload.get("name"))
        description = parse_description(payload.get("description"))
    elif FLAT_SHAPE_KEYS.intersection(payload.keys()):
        raise InvalidPayloadError("is required", field="meals")
    else:
        meals, day_keys = _flatten_date_map(payload, None)
        explicit_range = None
        name = None
        description = None

    if explicit_range is not None:
        for meal in meals:
            if not explicit_range.contains(meal.date):
                raise InvalidPayloadError(
                    f"meal for recipe {meal.recipe_id} on {meal.date.isoformat()} is outside "
                    f"{explicit_range.start.isoformat()}..{explicit_range.end.isoformat()}",
                    field="meals",
                )
        return NormalizedMealPlan(
            meals=meals, date_range=explicit_range, name=name, description=description
        )

    if not day_keys:
        raise InvalidPayloadError("cannot derive a date range without meals", field="dateRange")

    return NormalizedMealPlan(
        meals=meals,
        date_range=DateRange.covering(day_keys),
        name=name,
        description=description,
    )


def normalize_meal_entry(entry: Any, field: str = "meal") -> PlannedMeal:
    """Normalize one flat ``{recipeId, date, servings}`` entry.

    Raises:
        InvalidPayloadError: If the entry is not an object or has invalid fields
    """
    if not isinstance(entry, Mapping):
        raise InvalidPayloadError("meal entry must be an object", field=field)

    recipe_id = _parse_recipe_id(entry.get("recipeId"), f"{field}.recipeId")
    day = parse_date(entry.get("date"), f"{field}.date")
    servings = _parse_servings(entry.get("servings"), f"{field}.servings")

    return PlannedMeal(recipe_id=recipe_id, date=day, servings=servings)


def parse_date(value: Any, field: str) -> date:
    """Parse a calendar date from an ISO string.

    Accepts ``YYYY-MM-DD`` and full ISO timestamps such as the
    ``2024-02-01T00:00:00.000Z`` form stored by earlier clients; the time
    part is dropped.

    Raises:
        InvalidPayloadError: If the value is missing or not an ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if not isinstance(value, str) or not value.strip():
        raise InvalidPayloadError("date is required", field=field)

    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    except ValueError as e:
        raise InvalidPayloadError(f"'{value}' is not an ISO date", field=field) from e


def _flatten_date_map(
    date_map: Mapping[str, Any], prefix: Optional[str]
) -> Tuple[List[PlannedMeal], List[date]]:
    """Flatten ``{date: {slot: snapshot}}`` into canonical entries.

    Dates are emitted in ascending order and slots in payload order.
    A ``null`` slot is an empty slot and produces no entry. Every date key
    counts for range derivation, even one without meals.
    """
    parsed: List[Tuple[date, str, Any]] = []
    for key, slots in date_map.items():
        field = f"{prefix}.{key}" if prefix else str(key)
        parsed.append((parse_date(key, field), field, slots))

    parsed.sort(key=lambda item: item[0])

    meals: List[PlannedMeal] = []
    for day, field, slots in parsed:
        if not isinstance(slots, Mapping):
            raise InvalidPayloadError("must map meal slots to recipes", field=field)

        for slot_name, slot in slots.items():
            if slot is None:
                continue
            meals.append(_snapshot_to_meal(slot, day, f"{field}.{slot_name}"))

    return meals, [day for day, _, _ in parsed]


def _snapshot_to_meal(slot: Any, day: date, field: str) -> PlannedMeal:
    if not isinstance(slot, Mapping):
        raise InvalidPayloadError("recipe snapshot must be an object", field=field)

    snapshot = slot.get("recipeSnapshot", slot)
    if not isinstance(snapshot, Mapping):
        raise InvalidPayloadError("recipe snapshot must be an object", field=f"{field}.recipeSnapshot")

    raw_id = next((snapshot[k] for k in RECIPE_ID_KEYS if snapshot.get(k)), None)
    recipe_id = _parse_recipe_id(raw_id, f"{field}._id")
    servings = _parse_servings(snapshot.get("servings"), f"{field}.servings")

    return PlannedMeal(recipe_id=recipe_id, date=day, servings=servings)


def parse_explicit_range(payload: Mapping[str, Any]) -> Optional[DateRange]:
    """Read the explicit date range of a flat payload, None when absent.

    Raises:
        InvalidPayloadError: If a bound is missing or unparseable, or start > end
    """
    raw_range = payload.get("dateRange")

    if raw_range is not None:
        if not isinstance(raw_range, Mapping):
            raise InvalidPayloadError("must be an object with start and end", field="dateRange")
        start_value, end_value = raw_range.get("start"), raw_range.get("end")
        start_field, end_field = "dateRange.start", "dateRange.end"
    elif "startDate" in payload or "endDate" in payload:
        # Legacy clients sent the range as two top-level fields
        start_value, end_value = payload.get("startDate"), payload.get("endDate")
        start_field, end_field = "startDate", "endDate"
    else:
        return None

    start = parse_date(start_value, start_field)
    end = parse_date(end_value, end_field)

    if start > end:
        raise InvalidPayloadError(
            f"start {start.isoformat()} is after end {end.isoformat()}", field="dateRange"
        )

    return DateRange(start=start, end=end)


def _parse_recipe_id(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidPayloadError("recipe id is required", field=field)
    return value.strip()


def _parse_servings(value: Any, field: str) -> int:
    if value is None:
        return DEFAULT_SERVINGS

    if isinstance(value, bool):
        raise InvalidPayloadError("servings must be a whole number", field=field)

    if isinstance(value, float) and value.is_integer():
        value = int(value)

    if not isinstance(value, int):
        raise InvalidPayloadError("servings must be a whole number", field=field)

    if value < 1:
        raise InvalidPayloadError(f"servings must be at least 1, got {value}", field=field)

    return value


def parse_name(value: Any) -> Optional[str]:
    """Blank names count as no name."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidPayloadError("must be a string", field="name")
    return value.strip() or None


def parse_description(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidPayloadError("must be a string", field="description")
    return value.strip() or None
