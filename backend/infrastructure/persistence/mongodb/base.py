"""Base MongoDB repository with reusable patterns.

Provides common functionality for MongoDB repositories:
- Connection management
- Document mapping (domain <-> MongoDB)
- Error logging and translation
- Index creation

Concrete MongoDB repositories inherit from MongoBaseRepository.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic, Optional, Dict, Any, List, Tuple
from uuid import UUID
from datetime import date, datetime, timezone
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from domain.mealplan.core.exceptions.mealplan_errors import PersistenceFaultError
from infrastructure.config import get_mongodb_uri, get_mongodb_database


TEntity = TypeVar("TEntity")

logger = logging.getLogger(__name__)


class MongoBaseRepository(ABC, Generic[TEntity]):
    """
    Abstract base class for MongoDB repositories.

    Provides:
    - Connection pooling (motor handles this automatically)
    - UUID / date / datetime conversion helpers
    - Driver error logging, translated through translate_error()
    - Unreadable documents surfaced as PersistenceFaultError via _to_entity()

    Subclasses must implement:
    - collection_name: Name of MongoDB collection
    - to_document(): Convert domain entity to MongoDB document
    - from_document(): Convert MongoDB document to domain entity

    Example:
        class MongoMealPlanRepository(MongoBaseRepository[MealPlan]):
            @property
            def collection_name(self) -> str:
                return "mealplan"
            ...
    """

    def __init__(self, client: Optional[AsyncIOMotorClient] = None):
        """
        Initialize repository with optional client.

        Args:
            client: Motor client (if None, creates new one from config)

        Raises:
            ValueError: If no client is given and MONGODB_URI is not set
        """
        if client is None:
            uri = get_mongodb_uri()
            if not uri:
                raise ValueError(
                    "MONGODB_URI not configured. "
                    "Set MONGODB_URI, MONGODB_USER, "
                    "and MONGODB_PASSWORD environment variables."
                )
            self._client: AsyncIOMotorClient = AsyncIOMotorClient(uri, tz_aware=True)
        else:
            self._client = client

        database_name = get_mongodb_database()
        self._db = self._client[database_name]
        self._collection = self._db[self.collection_name]

        logger.info(
            "mongodb.repository_ready",
            extra={
                "repository": self.__class__.__name__,
                "collection": self.collection_name,
                "database": database_name,
            },
        )

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """MongoDB collection name."""
        pass

    @abstractmethod
    def to_document(self, entity: TEntity) -> Dict[str, Any]:
        pass

    @abstractmethod
    def from_document(self, doc: Dict[str, Any]) -> TEntity:
        """
        Convert MongoDB document to domain entity.

        Raises:
            ValueError: If document is invalid or missing required fields
        """
        pass

    def translate_error(self, operation: str, error: PyMongoError) -> Exception:
        """Exception to raise for a failed driver call."""
        return PersistenceFaultError(operation, str(error))

    def _to_entity(self, doc: Dict[str, Any]) -> TEntity:
        """Map a stored document, treating unreadable documents as a store fault."""
        try:
            return self.from_document(doc)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(
                "mongodb.document_invalid",
                extra={
                    "collection": self.collection_name,
                    "document_id": str(doc.get("_id")),
                    "error": str(e),
                },
            )
            raise PersistenceFaultError("decode", str(e)) from e

    @property
    def collection(self) -> AsyncIOMotorCollection:
        """Get MongoDB collection handle."""
        return self._collection

    @staticmethod
    def uuid_to_str(uuid_value: UUID) -> str:
        return str(uuid_value)

    @staticmethod
    def str_to_uuid(str_value: str) -> UUID:
        return UUID(str_value)

    @staticmethod
    def date_to_iso(value: date) -> str:
        return value.isoformat()

    @staticmethod
    def iso_to_date(iso_str: str) -> date:
        """Parse a stored date; timestamps written by older clients keep their date part."""
        if len(iso_str) == 10:
            return date.fromisoformat(iso_str)
        return datetime.fromisoformat(iso_str.replace("Z", "+00:00")).date()

    @staticmethod
    def datetime_to_iso(dt: datetime) -> str:
        """
        Convert datetime to ISO string for MongoDB storage.

        Raises:
            ValueError: If dt is naive
        """
        if dt.tzinfo is None:
            raise ValueError("Datetime must be timezone-aware")
        return dt.isoformat()

    @staticmethod
    def iso_to_datetime(iso_str: str) -> datetime:
        """Convert ISO string to timezone-aware datetime, assuming UTC when naive."""
        dt = datetime.fromisoformat(iso_str.replace("Z", "+00:00"))
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt

    def _fail(self, operation: str, error: PyMongoError, filter_dict: Optional[Dict[str, Any]] = None) -> Exception:
        logger.error(
            "mongodb.operation_failed",
            extra={
                "operation": operation,
                "collection": self.collection_name,
                "filter": filter_dict,
                "error": str(error),
            },
        )
        return self.translate_error(operation, error)

    async def _find_one(self, filter_dict: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            return await self._collection.find_one(filter_dict)
        except PyMongoError as e:
            raise self._fail("find_one", e, filter_dict) from e

    async def _find_many(
        self,
        filter_dict: Dict[str, Any],
        sort: Optional[List[Tuple[str, int]]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Find multiple documents.

        Args:
            filter_dict: MongoDB filter
            sort: Sort specification [(field, direction), ...]
            limit: Max documents to return (None for all)
        """
        try:
            cursor = self._collection.find(filter_dict)
            if sort:
                cursor = cursor.sort(sort)
            if limit:
                cursor = cursor.limit(limit)
            return await cursor.to_list(length=limit)
        except PyMongoError as e:
            raise self._fail("find_many", e, filter_dict) from e

    async def _insert_one(self, document: Dict[str, Any]) -> None:
        try:
            await self._collection.insert_one(document)
        except PyMongoError as e:
            raise self._fail("insert_one", e) from e

    async def _upsert_one(self, filter_dict: Dict[str, Any], update_dict: Dict[str, Any]) -> None:
        try:
            await self._collection.update_one(filter_dict, update_dict, upsert=True)
        except PyMongoError as e:
            raise self._fail("update_one", e, filter_dict) from e

    async def _find_one_and_set(
        self, filter_dict: Dict[str, Any], fields: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Set fields on one document and return it as updated.

        Returns:
            Updated document, or None if nothing matched filter_dict
        """
        try:
            return await self._collection.find_one_and_update(
                filter_dict,
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise self._fail("find_one_and_update", e, filter_dict) from e

    async def _delete_one(self, filter_dict: Dict[str, Any]) -> int:
        """Delete one document; returns the number deleted (0 or 1)."""
        try:
            result = await self._collection.delete_one(filter_dict)
            return result.deleted_count
        except PyMongoError as e:
            raise self._fail("delete_one", e, filter_dict) from e

    async def _create_index(self, keys: List[Tuple[str, int]], **kwargs: Any) -> None:
        try:
            await self._collection.create_index(keys, **kwargs)
        except PyMongoError as e:
            raise self._fail("create_index", e) from e

    async def close(self) -> None:
        """Close MongoDB connection."""
        self._client.close()
        logger.info("mongodb.closed", extra={"repository": self.__class__.__name__})
