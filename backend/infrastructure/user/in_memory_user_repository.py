"""In-memory User Repository for testing."""

from copy import deepcopy
from typing import Dict, Optional

from domain.user.core.entities.user import User
from domain.user.core.value_objects.user_id import UserId
from domain.user.core.value_objects.auth0_sub import Auth0Sub
from domain.user.core.ports.user_repository import IUserRepository


class InMemoryUserRepository(IUserRepository):
    """In-memory implementation of User repository.

    Stores users keyed by auth0_sub, copied on the way in and out.

    Examples:
        >>> repo = InMemoryUserRepository()
        >>> await repo.save(User.create(Auth0Sub("auth0|123")))
        >>> found = await repo.find_by_auth0_sub(Auth0Sub("auth0|123"))
    """

    def __init__(self) -> None:
        self._users: Dict[str, User] = {}

    async def save(self, user: User) -> None:
        self._users[str(user.auth0_sub)] = deepcopy(user)

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        for user in self._users.values():
            if user.user_id == user_id:
                return deepcopy(user)
        return None

    async def find_by_auth0_sub(self, auth0_sub: Auth0Sub) -> Optional[User]:
        user = self._users.get(str(auth0_sub))
        return deepcopy(user) if user is not None else None

    def count(self) -> int:
        return len(self._users)
