"""Authentication provider port (interface)."""

from abc import ABC, abstractmethod
from typing import Dict, Any


class IAuthProvider(ABC):
    """Authentication provider interface.

    Abstracts the identity provider (Auth0) so the middleware can be tested
    with a fake and the provider swapped without touching request handling.
    """

    @abstractmethod
    async def verify_token(self, token: str) -> Dict[str, Any]:
        """Verify a bearer token and return its claims.

        Args:
            token: JWT access token from the Authorization header

        Returns:
            Token claims with at least ``sub``; ``email`` and ``name``
            when the token carries profile claims.

        Raises:
            InvalidTokenError: Token is invalid, expired, or has wrong audience
            JWKSError: Signing keys cannot be fetched
        """
        pass


class InvalidTokenError(Exception):
    """Token verification failed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid token: {reason}")


class JWKSError(Exception):
    """JWKS fetching or processing failed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"JWKS error: {reason}")
