"""Response models of the meal plan REST API (camelCase on the wire)."""

from datetime import date as CalendarDate, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from domain.mealplan.core.entities.meal_plan import MealPlan
from domain.user.core.entities.user import User


class DateRangeResponse(BaseModel):
    start: CalendarDate
    end: CalendarDate


class PlannedMealResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    recipe_id: str = Field(alias="recipeId")
    date: CalendarDate
    servings: int


class MealPlanResponse(BaseModel):
    """Meal plan as returned by every meal plan endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    owner_id: str = Field(alias="ownerId")
    name: Optional[str] = None
    description: Optional[str] = None
    date_range: DateRangeResponse = Field(alias="dateRange")
    meals: List[PlannedMealResponse]
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_domain(cls, plan: MealPlan) -> "MealPlanResponse":
        return cls(
            id=str(plan.plan_id),
            owner_id=plan.owner_id.value,
            name=plan.name,
            description=plan.description,
            date_range=DateRangeResponse(start=plan.date_range.start, end=plan.date_range.end),
            meals=[
                PlannedMealResponse(recipe_id=meal.recipe_id, date=meal.date, servings=meal.servings)
                for meal in plan.meals
            ],
            created_at=plan.created_at,
            updated_at=plan.updated_at,
        )


class DeleteResponse(BaseModel):
    message: str
    id: str


class UserProfileResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    auth0_sub: str = Field(alias="auth0Sub")
    email: Optional[str] = None
    name: Optional[str] = None
    created_at: datetime = Field(alias="createdAt")
    last_authenticated_at: Optional[datetime] = Field(default=None, alias="lastAuthenticatedAt")

    @classmethod
    def from_domain(cls, user: User) -> "UserProfileResponse":
        return cls(
            user_id=str(user.user_id),
            auth0_sub=str(user.auth0_sub),
            email=user.email,
            name=user.name,
            created_at=user.created_at,
            last_authenticated_at=user.last_authenticated_at,
        )
