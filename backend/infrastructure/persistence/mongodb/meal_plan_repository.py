"""MongoDB implementation of the meal plan repository."""

from typing import Any, Dict, List, Optional

from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from domain.mealplan.core.entities.meal_plan import MealPlan
from domain.mealplan.core.exceptions.mealplan_errors import IntegrityFaultError
from domain.mealplan.core.ports.meal_plan_repository import IMealPlanRepository
from domain.mealplan.core.value_objects.date_range import DateRange
from domain.mealplan.core.value_objects.meal_plan_id import MealPlanId
from domain.mealplan.core.value_objects.owner_id import OwnerId
from domain.mealplan.core.value_objects.planned_meal import PlannedMeal
from infrastructure.persistence.mongodb.base import MongoBaseRepository


class MongoMealPlanRepository(MongoBaseRepository[MealPlan], IMealPlanRepository):
    """
    MongoDB implementation of IMealPlanRepository.

    Storage Strategy:
    - One document per owner, meals embedded as subdocuments
    - UUID fields stored as strings
    - Calendar dates stored as ``YYYY-MM-DD``, timestamps as ISO 8601 strings

    Document Schema:
    {
        "_id": "uuid-string",
        "owner_id": "auth0|123",
        "name": "Week 6",
        "description": "Batch cooking week",
        "date_range": {"start": "2024-02-01", "end": "2024-02-07"},
        "meals": [{"recipe_id": "R1", "date": "2024-02-01", "servings": 2}],
        "created_at": "2024-01-31T18:00:00+00:00",
        "updated_at": "2024-01-31T18:00:00+00:00"
    }

    Indexes:
    - owner_id: unique, keeps concurrent first saves from creating two plans
    """

    @property
    def collection_name(self) -> str:
        return "mealplan"

    async def ensure_indexes(self) -> None:
        """Create the unique owner index (no-op when it already exists)."""
        await self._create_index([("owner_id", ASCENDING)], unique=True, name="owner_id_unique")

    def translate_error(self, operation: str, error: PyMongoError) -> Exception:
        if isinstance(error, DuplicateKeyError):
            key_value = (error.details or {}).get("keyValue") or {}
            return IntegrityFaultError(
                str(key_value.get("owner_id", "unknown")),
                "a meal plan already exists for this owner",
            )
        return super().translate_error(operation, error)

    # Document Mapping

    def to_document(self, entity: MealPlan) -> Dict[str, Any]:
        plan = entity
        return {
            "_id": self.uuid_to_str(plan.plan_id.value),
            "owner_id": plan.owner_id.value,
            **self._mutable_fields(plan),
            "created_at": self.datetime_to_iso(plan.created_at),
        }

    def from_document(self, doc: Dict[str, Any]) -> MealPlan:
        """
        Convert MongoDB document to MealPlan.

        Raises:
            ValueError: If document is invalid or missing required fields
        """
        try:
            return MealPlan(
                plan_id=MealPlanId(self.str_to_uuid(doc["_id"])),
                owner_id=OwnerId(doc["owner_id"]),
                name=doc.get("name"),
                description=doc.get("description"),
                date_range=DateRange(
                    start=self.iso_to_date(doc["date_range"]["start"]),
                    end=self.iso_to_date(doc["date_range"]["end"]),
                ),
                meals=[
                    PlannedMeal(
                        recipe_id=meal["recipe_id"],
                        date=self.iso_to_date(meal["date"]),
                        servings=meal.get("servings", 1),
                    )
                    for meal in doc.get("meals", [])
                ],
                created_at=self.iso_to_datetime(doc["created_at"]),
                updated_at=self.iso_to_datetime(doc["updated_at"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid meal plan document {doc.get('_id')}: {e}") from e

    def _mutable_fields(self, plan: MealPlan) -> Dict[str, Any]:
        return {
            "name": plan.name,
            "description": plan.description,
            "date_range": {
                "start": self.date_to_iso(plan.date_range.start),
                "end": self.date_to_iso(plan.date_range.end),
            },
            "meals": [
                {
                    "recipe_id": meal.recipe_id,
                    "date": self.date_to_iso(meal.date),
                    "servings": meal.servings,
                }
                for meal in plan.meals
            ],
            "updated_at": self.datetime_to_iso(plan.updated_at),
        }

    # Repository Operations

    async def find_one_by_owner(self, owner_id: OwnerId) -> Optional[MealPlan]:
        # Two is enough to tell "one" from "several"
        docs = await self._find_many({"owner_id": owner_id.value}, limit=2)

        if not docs:
            return None
        if len(docs) > 1:
            raise IntegrityFaultError(owner_id.value, "more than one meal plan stored for owner")

        return self._to_entity(docs[0])

    async def find_by_id(self, plan_id: MealPlanId) -> Optional[MealPlan]:
        doc = await self._find_one({"_id": self.uuid_to_str(plan_id.value)})
        return self._to_entity(doc) if doc else None

    async def list_by_owner(self, owner_id: OwnerId) -> List[MealPlan]:
        docs = await self._find_many({"owner_id": owner_id.value}, sort=[("created_at", ASCENDING)])
        return [self._to_entity(doc) for doc in docs]

    async def insert(self, plan: MealPlan) -> MealPlan:
        await self._insert_one(self.to_document(plan))
        return plan

    async def replace(self, plan: MealPlan) -> Optional[MealPlan]:
        doc = await self._find_one_and_set(
            {"_id": self.uuid_to_str(plan.plan_id.value)},
            self._mutable_fields(plan),
        )
        return self._to_entity(doc) if doc else None

    async def delete_by_id(self, plan_id: MealPlanId) -> bool:
        deleted = await self._delete_one({"_id": self.uuid_to_str(plan_id.value)})
        return deleted > 0
