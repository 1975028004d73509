"""REST endpoints for the authenticated user."""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request

from application.user.commands.authenticate_user import AuthenticateUserCommand
from domain.mealplan.core.exceptions.mealplan_errors import UnauthenticatedError
from domain.user.core.ports.user_repository import IUserRepository
from infrastructure.identity.resolvers import SESSION_USER_KEY

from .dependencies import get_auth_claims, get_user_repository
from .schemas import UserProfileResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/profile", response_model=UserProfileResponse)
async def get_profile(
    request: Request,
    claims: Optional[Dict[str, Any]] = Depends(get_auth_claims),
    repository: IUserRepository = Depends(get_user_repository),
) -> UserProfileResponse:
    """Find or create the user behind the bearer token.

    When sessions are enabled the subject is also stored in the session,
    which is what the ``session`` identity scheme reads.
    """
    if not claims:
        raise UnauthenticatedError("Missing authorization token")

    try:
        user = await AuthenticateUserCommand(repository).execute(claims)
    except ValueError as e:
        raise UnauthenticatedError(f"Unusable token subject: {e}") from e

    if "session" in request.scope:
        request.session[SESSION_USER_KEY] = {"sub": str(user.auth0_sub), "email": user.email}

    return UserProfileResponse.from_domain(user)
