"""Identity resolver factory.

IDENTITY_SCHEME selects how meal plan owners are identified:
- "auth0_sub" (default): Auth0 subject of the bearer token
- "session": subject stored in the session cookie
- "user_id": internal user id of the registered user
"""

from typing import Optional

from domain.mealplan.core.ports.identity_resolver import IIdentityResolver
from domain.user.core.ports.user_repository import IUserRepository
from infrastructure.config import get_identity_scheme
from infrastructure.identity.resolvers import (
    Auth0SubjectResolver,
    SessionSubjectResolver,
    UserIdResolver,
)

IDENTITY_SCHEMES = ("auth0_sub", "session", "user_id")


def create_identity_resolver(
    scheme: Optional[str] = None,
    user_repository: Optional[IUserRepository] = None,
) -> IIdentityResolver:
    """Create the resolver for a scheme (IDENTITY_SCHEME when None).

    Raises:
        ValueError: If the scheme is unknown
    """
    scheme = (scheme or get_identity_scheme()).lower()

    if scheme == "auth0_sub":
        return Auth0SubjectResolver()
    if scheme == "session":
        return SessionSubjectResolver()
    if scheme == "user_id":
        if user_repository is None:
            from infrastructure.user.repository_factory import get_user_repository

            user_repository = get_user_repository()
        return UserIdResolver(user_repository)

    raise ValueError(
        f"Unknown IDENTITY_SCHEME: {scheme}. Use one of: {', '.join(IDENTITY_SCHEMES)}"
    )
