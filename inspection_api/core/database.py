"""
MongoDB access for every service in the app.

Documents are keyed by a string ``_id`` and handed to callers as plain
dicts with that key exposed as ``id``, so services never deal with
driver types.
"""
import uuid
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorGridFSBucket
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import OperationFailure, PyMongoError

from inspection_api.core.config import settings
from inspection_api.core.errors import DataAccessError, NotFoundError, PermissionDeniedError
from inspection_api.core.logger import get_logger

logger = get_logger(__name__)

UNAUTHORIZED_CODE = 13

# The client connects lazily, on the first operation
client = AsyncIOMotorClient(settings.MONGO_URI, serverSelectionTimeoutMS=5000)
db = client[settings.MONGO_DBNAME]


@contextmanager
def translate_errors(collection_name: str):
    try:
        yield
    except OperationFailure as e:
        if e.code == UNAUTHORIZED_CODE:
            raise PermissionDeniedError(f"Access to '{collection_name}' denied") from e
        raise DataAccessError(f"'{collection_name}' operation failed: {e}") from e
    except PyMongoError as e:
        raise DataAccessError(f"'{collection_name}' operation failed: {e}") from e


def _to_filter(filters: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not filters:
        return {}
    return {("_id" if key == "id" else key): value for key, value in filters.items()}


def to_record(document: Dict[str, Any]) -> Dict[str, Any]:
    record = {key: value for key, value in document.items() if key != "_id"}
    return {"id": str(document["_id"]), **record}


class DocumentStore:
    """CRUD over a single collection."""

    def __init__(self, collection):
        self.collection = collection
        self.name = collection.name

    async def add(self, data: Dict[str, Any]) -> str:
        doc_id = str(data.get("id") or uuid.uuid4().hex)
        document = {key: value for key, value in data.items() if key != "id"}
        document["_id"] = doc_id
        with translate_errors(self.name):
            await self.collection.insert_one(document)
        logger.info(f"Added document {doc_id} to {self.name}")
        return doc_id

    async def set(self, doc_id: str, data: Dict[str, Any]) -> None:
        document = {key: value for key, value in data.items() if key != "id"}
        with translate_errors(self.name):
            await self.collection.replace_one({"_id": doc_id}, document, upsert=True)

    async def get(self, doc_id: str) -> Optional[Dict[str, Any]]:
        with translate_errors(self.name):
            document = await self.collection.find_one({"_id": doc_id})
        return to_record(document) if document else None

    async def update(self, doc_id: str, updates: Dict[str, Any]) -> bool:
        updates = {key: value for key, value in updates.items() if key != "id"}
        with translate_errors(self.name):
            if updates:
                result = await self.collection.update_one({"_id": doc_id}, {"$set": updates})
                found = result.matched_count > 0
            else:
                found = await self.collection.count_documents({"_id": doc_id}, limit=1) > 0
        if not found:
            raise NotFoundError(f"Document '{doc_id}' not found in '{self.name}'")
        return True

    async def delete(self, doc_id: str) -> bool:
        with translate_errors(self.name):
            result = await self.collection.delete_one({"_id": doc_id})
        return result.deleted_count > 0

    async def query(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Equality query. A filter on an array field matches documents whose
        array contains the value.
        """
        cursor = self.collection.find(_to_filter(filters))
        if order_by:
            cursor = cursor.sort(order_by, DESCENDING if descending else ASCENDING)
        if limit:
            cursor = cursor.limit(limit)
        with translate_errors(self.name):
            return [to_record(document) async for document in cursor]

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        with translate_errors(self.name):
            return await self.collection.count_documents(_to_filter(filters))

    def watch(self, pipeline: Optional[List[Dict[str, Any]]] = None):
        return self.collection.watch(pipeline or [], full_document="updateLookup")


def get_store(name: str) -> DocumentStore:
    return DocumentStore(db[name])


def get_image_bucket() -> AsyncIOMotorGridFSBucket:
    return AsyncIOMotorGridFSBucket(db, bucket_name="images")


async def ping_db() -> bool:
    """
    Ping the MongoDB server. Returns True if reachable, False otherwise.
    """
    try:
        await db.command("ping")
        return True
    except PyMongoError as e:
        logger.error(f"MongoDB ping failed: {e}")
        return False


def close_client() -> None:
    client.close()
    logger.info("MongoDB client closed")
