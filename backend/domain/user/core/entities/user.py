"""User entity - aggregate root."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from domain.user.core.value_objects.user_id import UserId
from domain.user.core.value_objects.auth0_sub import Auth0Sub


@dataclass
class User:
    """User aggregate root.

    Created the first time a subject authenticates against the API.
    Primary lookup key is auth0_sub; user_id is the internal identity.

    Invariants:
    - auth0_sub must be unique and immutable
    - user_id is generated and immutable
    - last_authenticated_at cannot be before created_at

    Examples:
        >>> user = User.create(Auth0Sub("auth0|123456"), email="cook@example.com")
        >>> user.authenticate()
        >>> user.last_authenticated_at is not None
        True
    """

    user_id: UserId
    auth0_sub: Auth0Sub
    created_at: datetime
    updated_at: datetime
    email: Optional[str] = None
    name: Optional[str] = None
    last_authenticated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.last_authenticated_at and self.last_authenticated_at < self.created_at:
            raise ValueError(
                "last_authenticated_at cannot be before created_at: "
                f"{self.last_authenticated_at} < {self.created_at}"
            )

    @staticmethod
    def create(
        auth0_sub: Auth0Sub,
        email: Optional[str] = None,
        name: Optional[str] = None,
    ) -> "User":
        """Factory method to create a new user.

        Args:
            auth0_sub: Auth0 subject identifier from JWT
            email: Email claim, if the token carried one
            name: Name claim, if the token carried one

        Returns:
            New User instance
        """
        now = datetime.now(timezone.utc)
        return User(
            user_id=UserId.generate(),
            auth0_sub=auth0_sub,
            created_at=now,
            updated_at=now,
            email=email,
            name=name,
        )

    def authenticate(self, authenticated_at: Optional[datetime] = None) -> None:
        """Record a successful authentication.

        Raises:
            ValueError: If authenticated_at is before user creation
        """
        auth_time = authenticated_at or datetime.now(timezone.utc)

        if auth_time < self.created_at:
            raise ValueError(
                f"Authentication time {auth_time} cannot be before "
                f"user creation time {self.created_at}"
            )

        self.last_authenticated_at = auth_time
        self.updated_at = auth_time

    def update_profile(self, email: Optional[str] = None, name: Optional[str] = None) -> None:
        """Refresh profile fields from token claims; None keeps the current value."""
        changed = False
        if email is not None and email != self.email:
            self.email = email
            changed = True
        if name is not None and name != self.name:
            self.name = name
            changed = True
        if changed:
            self.updated_at = max(datetime.now(timezone.utc), self.created_at)

    def __eq__(self, other: object) -> bool:
        """Equality based on user_id (aggregate identity)."""
        if not isinstance(other, User):
            return False
        return self.user_id == other.user_id

    def __hash__(self) -> int:
        return hash(self.user_id)
