"""Fixtures for HTTP-level tests against create_app()."""

from typing import Any, AsyncGenerator, Dict

import pytest
from httpx import ASGITransport, AsyncClient

from app import create_app
from domain.user.auth.ports.auth_provider import IAuthProvider, InvalidTokenError, JWKSError
from infrastructure.persistence.in_memory.meal_plan_repository import InMemoryMealPlanRepository
from infrastructure.user.in_memory_user_repository import InMemoryUserRepository

TOKENS: Dict[str, Dict[str, Any]] = {
    "token-u1": {"sub": "auth0|U1", "email": "u1@example.com", "name": "Cook One"},
    "token-u2": {"sub": "auth0|U2", "email": "u2@example.com"},
}


class FakeAuthProvider(IAuthProvider):
    """Accepts the tokens in TOKENS; "jwks-down" simulates an unreachable key set."""

    async def verify_token(self, token: str) -> Dict[str, Any]:
        if token == "jwks-down":
            raise JWKSError("Failed to fetch JWKS: connection refused")
        if token not in TOKENS:
            raise InvalidTokenError("Signature verification failed")
        return dict(TOKENS[token])


@pytest.fixture
def auth_provider() -> FakeAuthProvider:
    return FakeAuthProvider()


@pytest.fixture
def meal_plan_repository() -> InMemoryMealPlanRepository:
    return InMemoryMealPlanRepository()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def app_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTH_ENABLED", "true")
    monkeypatch.setenv("AUTH_REQUIRED", "true")
    monkeypatch.setenv("IDENTITY_SCHEME", "auth0_sub")
    monkeypatch.delenv("SESSION_SECRET", raising=False)
    monkeypatch.delenv("CORS_ORIGINS", raising=False)


@pytest.fixture
async def client(
    app_env: None,
    auth_provider: FakeAuthProvider,
    meal_plan_repository: InMemoryMealPlanRepository,
    user_repository: InMemoryUserRepository,
) -> AsyncGenerator[AsyncClient, None]:
    app = create_app(
        auth_provider=auth_provider,
        meal_plan_repository=meal_plan_repository,
        user_repository=user_repository,
    )
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
