from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import MongoClient, ReturnDocument
from pymongo.errors import PyMongoError

from depot_inventory.core.exceptions import (
    DatabaseConnectionError, InvalidIdentifierError, StoreAccessError,
)
from depot_inventory.utils.logger import get_logger

DEFAULT_DB_NAME = "depot-inventory"


class DB:
    """
    Thin wrapper over a MongoDB database.

    String ids are converted to ObjectId here; driver failures surface as
    StoreAccessError. Use as a context manager to close the client.
    """

    def __init__(self, env: Dict[str, Any], client: Optional[MongoClient] = None):
        self.uri = env.get('uri')
        self.dbname = env.get('dbname') or DEFAULT_DB_NAME
        self.logger = get_logger(self.__class__.__name__)

        if client is None and not self.uri:
            raise DatabaseConnectionError('Invalid/Missing environment variable: "MONGODB_URI"')

        self.client = client if client is not None else MongoClient(self.uri)
        self._db = self.client[self.dbname]

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.client.close()
        self.logger.debug("MongoDB client closed")

    def getCollection(self, name: str):
        if not name:
            raise ValueError("Collection name must be provided.")
        return self._db[name]

    @staticmethod
    def toObjectId(record_id: Any) -> ObjectId:
        if isinstance(record_id, ObjectId):
            return record_id
        try:
            return ObjectId(record_id)
        except (InvalidId, TypeError) as e:
            raise InvalidIdentifierError(f"Invalid identifier: {record_id!r}") from e

    @contextmanager
    def _guard(self, operation: str, collection: str):
        try:
            yield
        except PyMongoError as e:
            self.logger.error(f"[DB ERROR] {operation} failed for collection '{collection}': {e}")
            raise StoreAccessError(f"{operation} failed: {e}") from e

    def listRecords(self, collection: str, query: Optional[dict] = None, sort: Optional[dict] = None) -> List[dict]:
        """Find documents matching ``query``; ``sort`` maps field to 1 / -1."""
        with self._guard("listRecords", collection):
            cursor = self.getCollection(collection).find(query or {})
            if sort:
                cursor = cursor.sort(list(sort.items()))
            return list(cursor)

    def listOne(self, collection: str, query: dict) -> Optional[dict]:
        with self._guard("listOne", collection):
            return self.getCollection(collection).find_one(query)

    def findById(self, collection: str, record_id: Any) -> Optional[dict]:
        oid = self.toObjectId(record_id)
        return self.listOne(collection, {"_id": oid})

    def insertRecord(self, collection: str, data: dict) -> str:
        with self._guard("insertRecord", collection):
            result = self.getCollection(collection).insert_one(dict(data))
            return str(result.inserted_id)

    def bulkInsertRecords(self, collection: str, data_list: List[dict]) -> List[str]:
        if not data_list:
            return []

        with self._guard("bulkInsertRecords", collection):
            result = self.getCollection(collection).insert_many([dict(d) for d in data_list])
            return [str(oid) for oid in result.inserted_ids]

    def updateRecord(self, collection: str, record_id: Any, data: dict) -> Optional[dict]:
        """``$set`` the given fields; returns the updated document or None when absent."""
        oid = self.toObjectId(record_id)
        with self._guard("updateRecord", collection):
            return self.getCollection(collection).find_one_and_update(
                {"_id": oid},
                {"$set": data},
                return_document=ReturnDocument.AFTER,
            )

    def deleteRecord(self, collection: str, record_id: Any) -> bool:
        oid = self.toObjectId(record_id)
        with self._guard("deleteRecord", collection):
            result = self.getCollection(collection).delete_one({"_id": oid})
            return result.deleted_count == 1

    def aggregate(self, collection: str, pipeline: List[dict]) -> List[dict]:
        with self._guard("aggregate", collection):
            return list(self.getCollection(collection).aggregate(pipeline))

    def distinct(self, collection: str, field: str) -> List[Any]:
        with self._guard("distinct", collection):
            return sorted(v for v in self.getCollection(collection).distinct(field) if v is not None)
