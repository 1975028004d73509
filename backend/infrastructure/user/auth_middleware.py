"""FastAPI authentication middleware."""

import logging
from typing import Any, Iterable, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from domain.user.auth.ports.auth_provider import (
    IAuthProvider,
    InvalidTokenError,
    JWKSError,
)
from infrastructure.config import get_bool_env

logger = logging.getLogger(__name__)

DEFAULT_EXEMPT_PATHS = ("/health", "/version", "/docs", "/openapi.json")


class AuthMiddleware(BaseHTTPMiddleware):
    """FastAPI middleware for JWT authentication.

    Verifies the Bearer token of each request and sets
    ``request.state.auth_claims`` for downstream handlers (None when the
    request is anonymous and authentication is optional).

    Environment Variables:
    - AUTH_REQUIRED: "true" to reject requests without a token (default: "true")

    Examples:
        >>> app.add_middleware(AuthMiddleware, auth_provider=Auth0Provider())
        >>> # In route handler:
        >>> sub = request.state.auth_claims["sub"]
    """

    def __init__(
        self,
        app: Any,
        auth_provider: Optional[IAuthProvider] = None,
        auth_required: Optional[bool] = None,
        exempt_paths: Iterable[str] = DEFAULT_EXEMPT_PATHS,
    ) -> None:
        """Initialize middleware.

        Args:
            app: ASGI application
            auth_provider: Token verifier (creates an Auth0Provider if None)
            auth_required: Overrides AUTH_REQUIRED when given
            exempt_paths: Paths served without authentication
        """
        super().__init__(app)
        if auth_provider is None:
            from infrastructure.user.auth0_provider import Auth0Provider

            auth_provider = Auth0Provider()
        self.auth_provider = auth_provider
        self.auth_required = (
            get_bool_env("AUTH_REQUIRED", True) if auth_required is None else auth_required
        )
        self.exempt_paths = frozenset(exempt_paths)

    async def dispatch(self, request: Request, call_next: Any) -> Any:
        request.state.auth_claims = None

        if request.url.path in self.exempt_paths or request.method == "OPTIONS":
            return await call_next(request)

        token = self._extract_token(request.headers.get("Authorization"))

        if not token:
            if self.auth_required:
                return JSONResponse(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    content={"error": "unauthorized", "message": "Missing authorization token"},
                )
            return await call_next(request)

        try:
            request.state.auth_claims = await self.auth_provider.verify_token(token)
        except InvalidTokenError as e:
            logger.info("auth.invalid_token", extra={"path": request.url.path, "reason": e.reason})
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"error": "invalid_token", "message": str(e)},
            )
        except JWKSError as e:
            # Signing keys unavailable: server-side failure
            logger.error("auth.jwks_unavailable", extra={"reason": e.reason})
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "error": "authentication_error",
                    "message": "Authentication service error",
                },
            )

        return await call_next(request)

    @staticmethod
    def _extract_token(auth_header: Optional[str]) -> Optional[str]:
        """Extract Bearer token from Authorization header.

        Examples:
            >>> AuthMiddleware._extract_token("Bearer eyJ...")
            'eyJ...'
            >>> AuthMiddleware._extract_token("eyJ...") is None
            True
        """
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            return None

        return parts[1]
