"""User repository port (interface)."""

from abc import ABC, abstractmethod
from typing import Optional

from domain.user.core.entities.user import User
from domain.user.core.value_objects.user_id import UserId
from domain.user.core.value_objects.auth0_sub import Auth0Sub


class IUserRepository(ABC):
    """Repository interface for the User aggregate."""

    @abstractmethod
    async def save(self, user: User) -> None:
        """Save user (create or update).

        Implementations upsert by auth0_sub, so saving twice is idempotent.
        """
        pass

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find user by internal ID.

        Returns:
            User entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_auth0_sub(self, auth0_sub: Auth0Sub) -> Optional[User]:
        """Find user by Auth0 subject identifier.

        This is the primary lookup method (auth0_sub is unique).

        Returns:
            User entity if found, None otherwise
        """
        pass
