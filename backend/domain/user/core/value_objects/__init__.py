"""User value objects."""

from .auth0_sub import Auth0Sub
from .user_id import UserId

__all__ = ["Auth0Sub", "UserId"]
