"""
Astra DB adapter (Data API over HTTP)

Commands are POSTed as JSON to
    {endpoint}/api/json/v1/{keyspace}/{collection}
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .base import BaseDocumentStore

logger = logging.getLogger(__name__)

API_PATH = "api/json/v1"
REQUEST_TIMEOUT = 15


def _to_astra(value: Any) -> Any:
    """Encode datetimes as Data API {"$date": epoch_millis}"""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return {"$date": int(value.timestamp() * 1000)}
    if isinstance(value, dict):
        return {k: _to_astra(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_astra(v) for v in value]
    return value


def _from_astra(value: Any) -> Any:
    if isinstance(value, dict):
        if set(value.keys()) == {"$date"}:
            return datetime.fromtimestamp(value["$date"] / 1000, tz=timezone.utc)
        return {k: _from_astra(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_from_astra(v) for v in value]
    return value


class AstraDocumentStore(BaseDocumentStore):
    """Document store backed by an Astra DB collection"""

    backend_name = "Astra DB"

    def __init__(self, collection_name: str, settings=None, session_factory=requests.Session):
        super().__init__(collection_name, settings)
        self.session_factory = session_factory
        self.session: Optional[requests.Session] = None
        config = self.settings.get_astra_config()
        self.keyspace_url = f"{config['endpoint']}/{API_PATH}/{config['keyspace']}"
        self.collection_url = f"{self.keyspace_url}/{collection_name}"
        self.token = config["token"]

    def _connect(self) -> None:
        if not self.token or not self.keyspace_url.startswith("http"):
            raise ValueError("ASTRA_DB_API_ENDPOINT and ASTRA_DB_APPLICATION_TOKEN must be set")

        session = self.session_factory()
        session.headers.update({
            "Token": self.token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[429, 502, 503, 504],
            allowed_methods=["POST"],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        self.session = session

    def _command(self, url: str, command: Dict[str, Any]) -> Dict[str, Any]:
        response = self.session.post(url, json=command, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        body = response.json()

        errors = body.get("errors")
        if errors:
            messages = "; ".join(e.get("message", str(e)) for e in errors)
            raise RuntimeError(f"Data API error: {messages}")
        return body

    def _ping(self) -> None:
        body = self._command(self.keyspace_url, {"findCollections": {}})
        collections = body.get("status", {}).get("collections", [])
        if self.collection_name not in collections:
            logger.warning(f"Collection '{self.collection_name}' not found in keyspace, it will be created on first insert")

    def _disconnect(self) -> None:
        if self.session is not None:
            self.session.close()
        self.session = None

    def _insert_one(self, document: Dict[str, Any]) -> str:
        body = self._command(self.collection_url, {"insertOne": {"document": _to_astra(document)}})
        inserted_ids = body.get("status", {}).get("insertedIds", [])
        if not inserted_ids:
            raise RuntimeError("Data API did not return an inserted id")
        return str(inserted_ids[0])

    def _fetch_page(self, skip: int, limit: int, sort_field: str, descending: bool) -> List[Dict[str, Any]]:
        direction = -1 if descending else 1
        command = {
            "find": {
                "filter": {},
                "sort": {sort_field: direction, "_id": direction},
                "options": {"skip": skip, "limit": limit},
            }
        }
        body = self._command(self.collection_url, command)
        documents = body.get("data", {}).get("documents", [])
        return [_from_astra(doc) for doc in documents]

    def _count_documents(self) -> int:
        body = self._command(self.collection_url, {"countDocuments": {}})
        return int(body.get("status", {}).get("count", 0))

    def _find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        body = self._command(self.collection_url, {"findOne": {"filter": _to_astra(query)}})
        doc = body.get("data", {}).get("document")
        return _from_astra(doc) if doc else None
