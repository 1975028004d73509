"""Unit tests for identity resolvers and their factory."""

import pytest

from domain.mealplan.core.exceptions import UnauthenticatedError
from domain.mealplan.core.ports.identity_resolver import RequestIdentityContext
from domain.mealplan.core.value_objects import OwnerId
from domain.user.core.entities.user import User
from domain.user.core.value_objects.auth0_sub import Auth0Sub
from infrastructure.identity import (
    Auth0SubjectResolver,
    SessionSubjectResolver,
    UserIdResolver,
    create_identity_resolver,
)
from infrastructure.user.in_memory_user_repository import InMemoryUserRepository


class TestAuth0SubjectResolver:
    @pytest.mark.asyncio
    async def test_resolves_sub_claim(self) -> None:
        context = RequestIdentityContext(auth_claims={"sub": "auth0|U1", "email": "a@b.c"})

        owner = await Auth0SubjectResolver().resolve_owner_id(context)

        assert owner == OwnerId("auth0|U1")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "claims",
        [None, {}, {"sub": ""}, {"sub": 42}, {"sub": "not-a-subject"}],
    )
    async def test_missing_or_malformed_sub(self, claims) -> None:
        with pytest.raises(UnauthenticatedError):
            await Auth0SubjectResolver().resolve_owner_id(RequestIdentityContext(auth_claims=claims))

    @pytest.mark.asyncio
    async def test_session_is_ignored(self) -> None:
        context = RequestIdentityContext(session={"user": {"sub": "auth0|U1"}})

        with pytest.raises(UnauthenticatedError, match="No auth claims"):
            await Auth0SubjectResolver().resolve_owner_id(context)


class TestSessionSubjectResolver:
    @pytest.mark.asyncio
    async def test_resolves_session_user(self) -> None:
        context = RequestIdentityContext(session={"user": {"sub": "google-oauth2|9"}})

        owner = await SessionSubjectResolver().resolve_owner_id(context)

        assert owner == OwnerId("google-oauth2|9")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "session",
        [{}, {"user": None}, {"user": "auth0|U1"}, {"user": {"email": "a@b.c"}}],
    )
    async def test_no_user_in_session(self, session) -> None:
        with pytest.raises(UnauthenticatedError):
            await SessionSubjectResolver().resolve_owner_id(RequestIdentityContext(session=session))

    @pytest.mark.asyncio
    async def test_token_claims_are_ignored(self) -> None:
        context = RequestIdentityContext(auth_claims={"sub": "auth0|U1"})

        with pytest.raises(UnauthenticatedError, match="No user in session"):
            await SessionSubjectResolver().resolve_owner_id(context)


class TestUserIdResolver:
    @pytest.fixture
    def user_repository(self) -> InMemoryUserRepository:
        return InMemoryUserRepository()

    @pytest.mark.asyncio
    async def test_resolves_registered_user(self, user_repository) -> None:
        user = User.create(Auth0Sub("auth0|U1"))
        await user_repository.save(user)

        owner = await UserIdResolver(user_repository).resolve_owner_id(
            RequestIdentityContext(auth_claims={"sub": "auth0|U1"})
        )

        assert owner == OwnerId(str(user.user_id))

    @pytest.mark.asyncio
    async def test_unregistered_subject(self, user_repository) -> None:
        with pytest.raises(UnauthenticatedError, match="No registered user"):
            await UserIdResolver(user_repository).resolve_owner_id(
                RequestIdentityContext(auth_claims={"sub": "auth0|U1"})
            )

        assert user_repository.count() == 0


class TestFactory:
    def test_default_scheme(self, monkeypatch) -> None:
        monkeypatch.delenv("IDENTITY_SCHEME", raising=False)

        assert isinstance(create_identity_resolver(), Auth0SubjectResolver)

    def test_scheme_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("IDENTITY_SCHEME", "Session")

        assert isinstance(create_identity_resolver(), SessionSubjectResolver)

    def test_user_id_scheme_uses_given_repository(self) -> None:
        repo = InMemoryUserRepository()

        resolver = create_identity_resolver("user_id", user_repository=repo)

        assert isinstance(resolver, UserIdResolver)
        assert resolver._user_repository is repo

    def test_user_id_scheme_defaults_to_shared_repository(self) -> None:
        from infrastructure.user.repository_factory import get_user_repository

        resolver = create_identity_resolver("user_id")

        assert resolver._user_repository is get_user_repository()

    def test_unknown_scheme(self) -> None:
        with pytest.raises(ValueError, match="Unknown IDENTITY_SCHEME"):
            create_identity_resolver("cookie")
