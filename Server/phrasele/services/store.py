"""
Save Store

Durable key-value storage for saved games. Values are opaque strings
produced by the persistence codec.
"""

from typing import Dict, Optional

from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi


class KeyValueStore:
    """Minimal interface every save store implements."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    """Process-local store, used when no database is configured."""

    def __init__(self):
        self.data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


class MongoKeyValueStore(KeyValueStore):
    """
    MongoDB-backed store: one document per key in the ``saves`` collection.
    """

    def __init__(self, mongo_uri: str, database: str = "phrasele", client: Optional[MongoClient] = None):
        """
        Args:
            mongo_uri: MongoDB connection string
            database: Database holding the ``saves`` collection
            client: Pre-built client, mainly for tests
        """
        self.client = client or MongoClient(mongo_uri, server_api=ServerApi('1'))
        self.db = self.client[database]
        self.saves_collection = self.db.saves

    def ping(self) -> bool:
        """Check the connection; raises if the server is unreachable."""
        self.client.admin.command('ping')
        return True

    def get(self, key: str) -> Optional[str]:
        doc = self.saves_collection.find_one({"_id": key})
        if not doc:
            return None
        return doc.get("value")

    def set(self, key: str, value: str) -> None:
        self.saves_collection.replace_one({"_id": key}, {"_id": key, "value": value}, upsert=True)

    def delete(self, key: str) -> None:
        self.saves_collection.delete_one({"_id": key})
