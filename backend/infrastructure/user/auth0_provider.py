"""Auth0 authentication provider implementation."""

import logging
import os
from typing import Dict, Any, Optional

import aiohttp
import jwt
from jwt import PyJWK
from jwt.exceptions import InvalidTokenError as JWTError, ExpiredSignatureError
from cachetools import TTLCache

from domain.user.auth.ports.auth_provider import (
    IAuthProvider,
    InvalidTokenError,
    JWKSError,
)

logger = logging.getLogger(__name__)


class Auth0Provider(IAuthProvider):
    """Auth0 authentication provider implementation.

    Verifies RS256 access tokens against the tenant's JWKS. Signing keys
    are cached by ``kid`` and refetched when an unknown ``kid`` shows up
    or the cache entry expires.

    Environment Variables:
    - AUTH0_DOMAIN: Auth0 tenant domain (e.g., "kitchen.eu.auth0.com")
    - AUTH0_AUDIENCE: API identifier/audience

    Examples:
        >>> provider = Auth0Provider()
        >>> claims = await provider.verify_token(token)
        >>> claims["sub"]
        'auth0|123456789'
    """

    def __init__(
        self,
        domain: Optional[str] = None,
        audience: Optional[str] = None,
        jwks_cache_ttl: int = 3600,
    ):
        """Initialize Auth0 provider.

        Args:
            domain: Auth0 tenant domain (defaults to env AUTH0_DOMAIN)
            audience: API audience (defaults to env AUTH0_AUDIENCE)
            jwks_cache_ttl: JWKS cache TTL in seconds (default: 3600 = 1h)

        Raises:
            ValueError: If required config is missing
        """
        self.domain = domain or os.getenv("AUTH0_DOMAIN")
        self.audience = audience or os.getenv("AUTH0_AUDIENCE")

        if not self.domain:
            raise ValueError("AUTH0_DOMAIN is required")
        if not self.audience:
            raise ValueError("AUTH0_AUDIENCE is required")

        self.jwks_cache: TTLCache[str, Dict[str, Any]] = TTLCache(maxsize=10, ttl=jwks_cache_ttl)

    @property
    def issuer(self) -> str:
        return f"https://{self.domain}/"

    async def verify_token(self, token: str) -> Dict[str, Any]:
        """Verify JWT token using Auth0 JWKS.

        Returns:
            Decoded claims (sub, aud, iss, exp, iat and any profile claims)

        Raises:
            InvalidTokenError: If token is invalid, expired, or malformed
            JWKSError: If JWKS fetching fails
        """
        try:
            kid = jwt.get_unverified_header(token).get("kid")
        except JWTError as e:
            raise InvalidTokenError(f"Malformed token header: {e}") from e

        if not kid:
            raise InvalidTokenError("Token header missing 'kid'")

        if kid not in self.jwks_cache:
            await self._refresh_jwks()

        jwk_dict = self.jwks_cache.get(kid)
        if not jwk_dict:
            raise InvalidTokenError(f"JWKS key {kid} not found")

        try:
            jwk = PyJWK.from_dict(jwk_dict)
            payload: Dict[str, Any] = jwt.decode(
                token,
                jwk.key,
                algorithms=["RS256"],
                audience=self.audience,
                issuer=self.issuer,
            )
        except ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        if not payload.get("sub"):
            raise InvalidTokenError("Token has no 'sub' claim")

        return payload

    async def _refresh_jwks(self) -> None:
        """Refresh JWKS from the tenant's well-known endpoint.

        Raises:
            JWKSError: If JWKS fetching fails
        """
        jwks_url = f"https://{self.domain}/.well-known/jwks.json"

        try:
            async with aiohttp.ClientSession() as session:
                timeout = aiohttp.ClientTimeout(total=5)
                async with session.get(jwks_url, timeout=timeout) as resp:
                    resp.raise_for_status()
                    jwks = await resp.json()
        except aiohttp.ClientError as e:
            logger.error("auth.jwks_fetch_failed", extra={"url": jwks_url, "error": str(e)})
            raise JWKSError(f"Failed to fetch JWKS: {e}") from e
        except ValueError as e:
            raise JWKSError(f"Failed to parse JWKS: {e}") from e

        for key in jwks.get("keys", []):
            kid = key.get("kid")
            if kid:
                self.jwks_cache[kid] = key
