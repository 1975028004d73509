"""Unit tests for the user repository factory."""

import pytest

from infrastructure.user import repository_factory
from infrastructure.user.in_memory_user_repository import InMemoryUserRepository
from infrastructure.user.mongo_user_repository import MongoUserRepository


def test_default_is_in_memory(monkeypatch):
    monkeypatch.delenv("USER_REPOSITORY", raising=False)

    assert isinstance(repository_factory.create_user_repository(), InMemoryUserRepository)


def test_mongodb_requires_uri(monkeypatch):
    monkeypatch.setenv("USER_REPOSITORY", "mongodb")
    monkeypatch.delenv("MONGODB_URI", raising=False)

    with pytest.raises(ValueError, match="MONGODB_URI"):
        repository_factory.create_user_repository()


@pytest.mark.asyncio
async def test_mongodb_backend(monkeypatch):
    monkeypatch.setenv("USER_REPOSITORY", "MongoDB")
    monkeypatch.setenv("MONGODB_URI", "mongodb://localhost:27017")

    repo = repository_factory.create_user_repository()

    assert isinstance(repo, MongoUserRepository)


def test_unknown_backend(monkeypatch):
    monkeypatch.setenv("USER_REPOSITORY", "redis")

    with pytest.raises(ValueError, match="Invalid USER_REPOSITORY value"):
        repository_factory.create_user_repository()


def test_singleton_and_reset(monkeypatch):
    monkeypatch.setenv("USER_REPOSITORY", "inmemory")

    first = repository_factory.get_user_repository()

    assert repository_factory.get_user_repository() is first
    repository_factory.reset_user_repository()
    assert repository_factory.get_user_repository() is not first
