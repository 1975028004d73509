"""Identity resolvers.

One adapter per upstream identity scheme. Each turns the authentication
state of a request into the OwnerId meal plans are keyed by.
"""

import logging
from typing import Any, Mapping, Optional

from domain.mealplan.core.exceptions.mealplan_errors import UnauthenticatedError
from domain.mealplan.core.ports.identity_resolver import (
    IIdentityResolver,
    RequestIdentityContext,
)
from domain.mealplan.core.value_objects.owner_id import OwnerId
from domain.user.core.ports.user_repository import IUserRepository
from domain.user.core.value_objects.auth0_sub import Auth0Sub

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"


def _subject_from(source: Optional[Mapping[str, Any]], where: str) -> Auth0Sub:
    """Read and validate the ``sub`` member of claims or session data."""
    if not source:
        raise UnauthenticatedError(f"No {where}")

    sub = source.get("sub")
    if not isinstance(sub, str) or not sub:
        raise UnauthenticatedError(f"No subject in {where}")

    try:
        return Auth0Sub(sub)
    except ValueError as e:
        raise UnauthenticatedError(f"Malformed subject in {where}") from e


class Auth0SubjectResolver(IIdentityResolver):
    """Owner identity is the Auth0 ``sub`` claim of the verified token."""

    async def resolve_owner_id(self, context: RequestIdentityContext) -> OwnerId:
        subject = _subject_from(context.auth_claims, "auth claims")
        return OwnerId(subject.value)


class SessionSubjectResolver(IIdentityResolver):
    """Owner identity is the subject stored in the session cookie.

    The session is filled by ``GET /auth/profile`` after a successful
    token login.
    """

    async def resolve_owner_id(self, context: RequestIdentityContext) -> OwnerId:
        session_user = context.session.get(SESSION_USER_KEY)
        if not isinstance(session_user, Mapping):
            raise UnauthenticatedError("No user in session")

        subject = _subject_from(session_user, "session")
        return OwnerId(subject.value)


class UserIdResolver(IIdentityResolver):
    """Owner identity is the internal user id registered for the subject.

    Lookup only: a subject without a registered user is unauthenticated
    until it has gone through ``GET /auth/profile``.
    """

    def __init__(self, user_repository: IUserRepository):
        self._user_repository = user_repository

    async def resolve_owner_id(self, context: RequestIdentityContext) -> OwnerId:
        subject = _subject_from(context.auth_claims, "auth claims")

        user = await self._user_repository.find_by_auth0_sub(subject)
        if user is None:
            logger.info("identity.unregistered_subject", extra={"auth0_sub": subject.value})
            raise UnauthenticatedError("No registered user for subject")

        return OwnerId(str(user.user_id))
