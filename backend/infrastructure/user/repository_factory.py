"""User repository factory for environment-based selection.

USER_REPOSITORY selects the implementation:
- "inmemory": InMemoryUserRepository (default, tests and local runs)
- "mongodb": MongoUserRepository (requires MONGODB_URI)
"""

import os
from typing import Optional

from domain.user.core.ports.user_repository import IUserRepository
from infrastructure.user.in_memory_user_repository import InMemoryUserRepository


def create_user_repository() -> IUserRepository:
    """Create user repository based on environment configuration.

    Raises:
        ValueError: If the value is unknown, or mongodb is selected without MONGODB_URI
    """
    repo_type = os.getenv("USER_REPOSITORY", "inmemory").lower()

    if repo_type == "mongodb":
        if not os.getenv("MONGODB_URI"):
            raise ValueError(
                "MONGODB_URI environment variable is required when USER_REPOSITORY=mongodb"
            )

        from infrastructure.user.mongo_user_repository import MongoUserRepository

        return MongoUserRepository()

    if repo_type == "inmemory":
        return InMemoryUserRepository()

    raise ValueError(
        f"Invalid USER_REPOSITORY value: {repo_type}. Expected 'inmemory' or 'mongodb'"
    )


_user_repository: Optional[IUserRepository] = None


def get_user_repository() -> IUserRepository:
    """Get singleton user repository instance."""
    global _user_repository

    if _user_repository is None:
        _user_repository = create_user_repository()

    return _user_repository


def reset_user_repository() -> None:
    """Reset the singleton (for testing purposes)."""
    global _user_repository
    _user_repository = None
