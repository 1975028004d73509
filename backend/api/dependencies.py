"""FastAPI dependencies shared by the REST routers."""

from typing import Any, Dict, Optional

from fastapi import Depends, Request

from application.mealplan.service import MealPlanUpsertService
from domain.mealplan.core.ports.identity_resolver import RequestIdentityContext
from domain.mealplan.core.value_objects.owner_id import OwnerId
from domain.user.core.ports.user_repository import IUserRepository


def get_meal_plan_service(request: Request) -> MealPlanUpsertService:
    service: MealPlanUpsertService = request.app.state.meal_plan_service
    return service


def get_user_repository(request: Request) -> IUserRepository:
    repository: IUserRepository = request.app.state.user_repository
    return repository


def get_auth_claims(request: Request) -> Optional[Dict[str, Any]]:
    """Claims set by AuthMiddleware; None when auth is off or the request is anonymous."""
    return getattr(request.state, "auth_claims", None)


def get_session(request: Request) -> Dict[str, Any]:
    """Session data, or an empty dict when SessionMiddleware is not installed."""
    if "session" not in request.scope:
        return {}
    return request.session


def get_identity_context(request: Request) -> RequestIdentityContext:
    return RequestIdentityContext(
        auth_claims=get_auth_claims(request),
        session=get_session(request),
    )


async def get_owner_id(
    context: RequestIdentityContext = Depends(get_identity_context),
    service: MealPlanUpsertService = Depends(get_meal_plan_service),
) -> OwnerId:
    """Resolve the caller's owner identity.

    Raises:
        UnauthenticatedError: Mapped to 401 before the body is looked at
    """
    return await service.resolve_owner(context)
