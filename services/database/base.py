"""
Base document store - append/list-only access to one collection.

Adapters implement the underscore hooks; connection lifecycle, retries
and pagination live here.
"""
import threading
import time
import logging
from typing import Any, Dict, List, Optional

from config.settings import settings as default_settings

logger = logging.getLogger(__name__)


class DatabaseConnectionError(Exception):
    """Raised when the store cannot be reached after all retries"""


class DatabaseOperationError(Exception):
    """Raised when a command against a connected store fails"""


class BaseDocumentStore:
    """Base class for document collections"""

    backend_name = "base"

    def __init__(self, collection_name: str, settings=None):
        self.settings = settings or default_settings
        self.collection_name = collection_name
        self.max_retries = max(1, self.settings.DB_MAX_RETRIES)
        self.retry_base_delay = self.settings.DB_RETRY_BASE_DELAY
        self.retry_max_delay = self.settings.DB_RETRY_MAX_DELAY
        self.page_size = self.settings.DB_PAGE_SIZE
        self._connected = False
        self._lock = threading.Lock()

    # === adapter hooks ===

    def _connect(self) -> None:
        raise NotImplementedError

    def _ping(self) -> None:
        raise NotImplementedError

    def _disconnect(self) -> None:
        raise NotImplementedError

    def _insert_one(self, document: Dict[str, Any]) -> str:
        raise NotImplementedError

    def _fetch_page(self, skip: int, limit: int, sort_field: str, descending: bool) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def _count_documents(self) -> int:
        raise NotImplementedError

    def _find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    # === lifecycle ===

    @property
    def connected(self) -> bool:
        return self._connected

    def _backoff_delay(self, attempt: int) -> float:
        return min(self.retry_base_delay * (2 ** (attempt - 1)), self.retry_max_delay)

    def open(self) -> None:
        """Connect (with retries) unless already connected"""
        if self._connected:
            return

        with self._lock:
            # another request may have connected while we waited
            if self._connected:
                return

            last_error = None
            for attempt in range(1, self.max_retries + 1):
                try:
                    logger.info(f"{self.backend_name} connection attempt {attempt}/{self.max_retries} for '{self.collection_name}'")
                    self._connect()
                    self._ping()
                    self._connected = True
                    logger.info(f"✓ Connected to '{self.collection_name}' ({self.backend_name})")
                    return
                except Exception as e:
                    last_error = e
                    logger.error(f"✗ Connection attempt {attempt} failed for '{self.collection_name}': {e}")
                    self._reset_connection()

                    if attempt < self.max_retries:
                        delay = self._backoff_delay(attempt)
                        logger.info(f"Waiting {delay:.1f}s before retry...")
                        time.sleep(delay)

            raise DatabaseConnectionError(
                f"Failed to connect to {self.backend_name} after {self.max_retries} attempts: {last_error}"
            ) from last_error

    def ensure_connected(self):
        """Ensure database is connected before operations"""
        if not self._connected:
            self.open()

    def close_on_failure(self) -> None:
        """Invalidate the cached connection so the next call reconnects"""
        with self._lock:
            self._reset_connection()

    def _reset_connection(self) -> None:
        try:
            self._disconnect()
        except Exception as e:
            logger.warning(f"Error while discarding connection for '{self.collection_name}': {e}")
        self._connected = False

    def close(self) -> None:
        """Disconnect from the store"""
        if self._connected:
            with self._lock:
                self._reset_connection()
            logger.info(f"Disconnected from '{self.collection_name}'")

    def _run(self, operation: str, func, *args):
        self.ensure_connected()
        try:
            return func(*args)
        except Exception as e:
            logger.error(f"Error during {operation} on '{self.collection_name}': {e}")
            self.close_on_failure()
            raise DatabaseOperationError(f"{operation} failed: {e}") from e

    # === operations ===

    def insert_one(self, document: Dict[str, Any]) -> str:
        """Insert one document and return its identifier"""
        inserted_id = self._run("insert_one", self._insert_one, document)
        logger.info(f"Inserted document {inserted_id} into '{self.collection_name}'")
        return inserted_id

    def find_all(self, sort_field: str = "submittedAt", descending: bool = True) -> List[Dict[str, Any]]:
        """
        Get every document in the collection.

        Fetches page by page so that stores applying a default page cap
        still return the full result set. A store may return fewer
        documents than requested, so only an empty page ends the loop.
        """
        documents: List[Dict[str, Any]] = []
        skip = 0

        while True:
            logger.debug(f"Fetching batch starting from {skip} in '{self.collection_name}'")
            batch = self._run("find", self._fetch_page, skip, self.page_size, sort_field, descending)
            if not batch:
                break

            documents.extend(batch)
            skip += len(batch)

        logger.info(f"Retrieved {len(documents)} documents from '{self.collection_name}'")
        return documents

    def count_documents(self) -> int:
        """Count total documents in collection"""
        return self._run("count_documents", self._count_documents)

    def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Find a single document matching an equality filter"""
        return self._run("find_one", self._find_one, query)
