"""MongoDB User Repository implementation."""

from typing import Any, Dict, Optional

from pymongo import ASCENDING

from domain.user.core.entities.user import User
from domain.user.core.value_objects.user_id import UserId
from domain.user.core.value_objects.auth0_sub import Auth0Sub
from domain.user.core.ports.user_repository import IUserRepository
from infrastructure.persistence.mongodb.base import MongoBaseRepository


class MongoUserRepository(MongoBaseRepository[User], IUserRepository):
    """MongoDB implementation of User repository.

    Document Schema:
    {
        "user_id": "uuid-string",
        "auth0_sub": "auth0|123",
        "email": "cook@example.com",
        "name": "Sam",
        "created_at": "...",
        "updated_at": "...",
        "last_authenticated_at": "..." | null
    }

    Saves upsert by auth0_sub, which carries a unique index. Driver errors
    and unreadable documents surface as PersistenceFaultError.
    """

    @property
    def collection_name(self) -> str:
        return "users"

    async def ensure_indexes(self) -> None:
        await self._create_index([("auth0_sub", ASCENDING)], unique=True, name="auth0_sub_unique")

    def to_document(self, entity: User) -> Dict[str, Any]:
        user = entity
        return {
            "user_id": str(user.user_id),
            "auth0_sub": str(user.auth0_sub),
            "email": user.email,
            "name": user.name,
            "created_at": self.datetime_to_iso(user.created_at),
            "updated_at": self.datetime_to_iso(user.updated_at),
            "last_authenticated_at": (
                self.datetime_to_iso(user.last_authenticated_at)
                if user.last_authenticated_at
                else None
            ),
        }

    def from_document(self, doc: Dict[str, Any]) -> User:
        last_auth = doc.get("last_authenticated_at")
        return User(
            user_id=UserId(doc["user_id"]),
            auth0_sub=Auth0Sub(doc["auth0_sub"]),
            email=doc.get("email"),
            name=doc.get("name"),
            created_at=self.iso_to_datetime(doc["created_at"]),
            updated_at=self.iso_to_datetime(doc["updated_at"]),
            last_authenticated_at=self.iso_to_datetime(last_auth) if last_auth else None,
        )

    async def save(self, user: User) -> None:
        """Save or update user, upserting by auth0_sub."""
        document = self.to_document(user)
        created_at = document.pop("created_at")

        await self._upsert_one(
            {"auth0_sub": str(user.auth0_sub)},
            {"$set": document, "$setOnInsert": {"created_at": created_at}},
        )

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        doc = await self._find_one({"user_id": str(user_id)})
        return self._to_entity(doc) if doc else None

    async def find_by_auth0_sub(self, auth0_sub: Auth0Sub) -> Optional[User]:
        """Find user by Auth0 subject, the primary lookup key."""
        doc = await self._find_one({"auth0_sub": str(auth0_sub)})
        return self._to_entity(doc) if doc else None
