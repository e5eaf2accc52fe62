"""
MongoDB adapter (PyMongo)
"""
from typing import Any, Dict, List, Optional
import logging

from pymongo import MongoClient, ASCENDING, DESCENDING

from .base import BaseDocumentStore

logger = logging.getLogger(__name__)


class MongoDocumentStore(BaseDocumentStore):
    """Document store backed by a MongoDB collection"""

    backend_name = "MongoDB"

    def __init__(self, collection_name: str, settings=None, client_factory=MongoClient):
        super().__init__(collection_name, settings)
        self.client_factory = client_factory
        self.sync_client: Optional[MongoClient] = None
        self.sync_db = None
        self.collection = None

    def _connect(self) -> None:
        config = self.settings.get_mongodb_config()
        self.sync_client = self.client_factory(
            config["uri"],
            maxPoolSize=10,
            minPoolSize=1,
            maxIdleTimeMS=10000,
            serverSelectionTimeoutMS=8000,
            socketTimeoutMS=15000,
            connectTimeoutMS=8000,
            retryWrites=True,
            retryReads=True,
            tz_aware=True,
        )
        self.sync_db = self.sync_client[config["database"]]
        self.collection = self.sync_db[self.collection_name]

    def _ping(self) -> None:
        self.sync_client.admin.command('ping')

    def _disconnect(self) -> None:
        if self.sync_client is not None:
            self.sync_client.close()
        self.sync_client = None
        self.sync_db = None
        self.collection = None

    @staticmethod
    def _normalize(doc: Dict[str, Any]) -> Dict[str, Any]:
        doc = dict(doc)
        if "_id" in doc:
            doc["_id"] = str(doc["_id"])
        return doc

    def _insert_one(self, document: Dict[str, Any]) -> str:
        result = self.collection.insert_one(dict(document))
        return str(result.inserted_id)

    def _fetch_page(self, skip: int, limit: int, sort_field: str, descending: bool) -> List[Dict[str, Any]]:
        # _id breaks ties so pages never overlap
        direction = DESCENDING if descending else ASCENDING
        cursor = (
            self.collection.find({})
            .sort([(sort_field, direction), ("_id", direction)])
            .skip(skip)
            .limit(limit)
        )
        return [self._normalize(doc) for doc in cursor]

    def _count_documents(self) -> int:
        return self.collection.count_documents({})

    def _find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        doc = self.collection.find_one(query)
        return self._normalize(doc) if doc else None
