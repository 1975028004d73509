"""REST endpoints for meal plans.

All routes act on behalf of the caller's owner identity, resolved before
the request body is looked at.
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Path, Response, status

from application.mealplan.service import MealPlanUpsertService
from domain.mealplan.core.exceptions.mealplan_errors import ForbiddenError
from domain.mealplan.core.value_objects.owner_id import OwnerId

from .dependencies import get_meal_plan_service, get_owner_id
from .schemas import DeleteResponse, MealPlanResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mealplan", tags=["mealplan"])


@router.get("", response_model=List[MealPlanResponse])
async def list_meal_plans(
    owner_id: OwnerId = Depends(get_owner_id),
    service: MealPlanUpsertService = Depends(get_meal_plan_service),
) -> List[MealPlanResponse]:
    """List the caller's meal plans (at most one)."""
    plans = await service.list_meal_plans(owner_id)
    return [MealPlanResponse.from_domain(plan) for plan in plans]


@router.get("/user/{user_id}", response_model=MealPlanResponse)
async def get_meal_plan_for_user(
    user_id: str = Path(..., description="Owner identity the plan is stored under"),
    owner_id: OwnerId = Depends(get_owner_id),
    service: MealPlanUpsertService = Depends(get_meal_plan_service),
) -> MealPlanResponse:
    """Return the plan of a user; callers can only read their own."""
    if user_id != owner_id.value:
        raise ForbiddenError(f"of user {user_id}", owner_id.value)

    plan = await service.get_meal_plan_by_owner(owner_id)
    return MealPlanResponse.from_domain(plan)


@router.get("/{plan_id}", response_model=MealPlanResponse)
async def get_meal_plan(
    plan_id: str,
    owner_id: OwnerId = Depends(get_owner_id),
    service: MealPlanUpsertService = Depends(get_meal_plan_service),
) -> MealPlanResponse:
    plan = await service.get_meal_plan(plan_id, owner_id)
    return MealPlanResponse.from_domain(plan)


@router.post(
    "",
    response_model=MealPlanResponse,
    status_code=status.HTTP_200_OK,
    responses={201: {"model": MealPlanResponse, "description": "Meal plan created"}},
)
async def upsert_meal_plan(
    response: Response,
    payload: Any = Body(default=None),
    owner_id: OwnerId = Depends(get_owner_id),
    service: MealPlanUpsertService = Depends(get_meal_plan_service),
) -> MealPlanResponse:
    """Save the caller's meal plan.

    Accepts the flat ``{"meals": [...], "dateRange": {...}}`` body or a
    nested ``{"<date>": {"<slot>": <recipe>}}`` map. Answers 201 when the
    plan was created and 200 when an existing plan was replaced.
    """
    result = await service.upsert_meal_plan(owner_id, payload)

    if result.created:
        response.status_code = status.HTTP_201_CREATED
    return MealPlanResponse.from_domain(result.plan)


@router.post("/{plan_id}/add-recipe", response_model=MealPlanResponse)
async def add_recipe(
    plan_id: str,
    payload: Any = Body(default=None),
    owner_id: OwnerId = Depends(get_owner_id),
    service: MealPlanUpsertService = Depends(get_meal_plan_service),
) -> MealPlanResponse:
    """Append ``{"recipeId", "date", "servings"?}`` to a plan."""
    plan = await service.add_recipe(plan_id, owner_id, payload)
    return MealPlanResponse.from_domain(plan)


@router.put("/{plan_id}", response_model=MealPlanResponse)
async def update_meal_plan(
    plan_id: str,
    payload: Any = Body(default=None),
    owner_id: OwnerId = Depends(get_owner_id),
    service: MealPlanUpsertService = Depends(get_meal_plan_service),
) -> MealPlanResponse:
    plan = await service.update_meal_plan(plan_id, owner_id, payload)
    return MealPlanResponse.from_domain(plan)


@router.delete("/{plan_id}", response_model=DeleteResponse)
async def delete_meal_plan(
    plan_id: str,
    owner_id: OwnerId = Depends(get_owner_id),
    service: MealPlanUpsertService = Depends(get_meal_plan_service),
) -> DeleteResponse:
    await service.delete_meal_plan(plan_id, owner_id)
    return DeleteResponse(message="Meal plan deleted", id=plan_id)
