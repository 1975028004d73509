"""Authenticate user command."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from domain.user.core.entities.user import User
from domain.user.core.value_objects.auth0_sub import Auth0Sub
from domain.user.core.ports.user_repository import IUserRepository

logger = logging.getLogger(__name__)


def _claim(claims: Dict[str, Any], name: str) -> Optional[str]:
    value = claims.get(name)
    return value if isinstance(value, str) and value else None


@dataclass
class AuthenticateUserCommand:
    """Command to find or create the user behind a verified token.

    Creates the user on first authentication and records the
    authentication time on every call. ``email`` and ``name`` claims,
    when present, refresh the stored profile.

    Examples:
        >>> command = AuthenticateUserCommand(repository)
        >>> user = await command.execute({"sub": "auth0|123", "email": "cook@example.com"})
    """

    repository: IUserRepository

    async def execute(
        self,
        claims: Dict[str, Any],
        authenticated_at: Optional[datetime] = None,
    ) -> User:
        """Execute authentication command.

        Args:
            claims: Verified JWT claims, ``sub`` required
            authenticated_at: Authentication timestamp (defaults to now)

        Returns:
            User entity (created or updated)

        Raises:
            ValueError: If the sub claim is missing or malformed
        """
        auth0_sub = Auth0Sub(claims.get("sub") or "")
        email = _claim(claims, "email")
        name = _claim(claims, "name")

        user = await self.repository.find_by_auth0_sub(auth0_sub)

        if user is None:
            user = User.create(auth0_sub, email=email, name=name)
            logger.info("user.created", extra={"auth0_sub": auth0_sub.value})
        else:
            user.update_profile(email=email, name=name)

        user.authenticate(authenticated_at)
        await self.repository.save(user)

        return user
