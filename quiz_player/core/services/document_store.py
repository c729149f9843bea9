"""Document-store collaborators used for quizzes and attempt results.

The application only needs three operations from a document database: create a
document in a collection, fetch one by id, and run a simple filtered/ordered
query. ``InMemoryDocumentStore`` implements them behind a lock so the API
thread and the result writer can share one instance with the Qt thread.
``JsonFileDocumentStore`` mirrors every write to a JSON file on disk.
"""

from __future__ import annotations

import copy
from datetime import datetime, timezone
import json
import logging
from pathlib import Path
from threading import Lock
from typing import Any, Protocol
from uuid import uuid4

logger = logging.getLogger(__name__)


class _ServerTimestamp:
    """Sentinel replaced by the store's clock when a document is written."""

    _instance: _ServerTimestamp | None = None

    def __new__(cls) -> _ServerTimestamp:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


class DocumentStore(Protocol):
    """Minimal document database interface."""

    def create(self, collection: str, payload: dict[str, Any]) -> str:
        ...

    def get(self, collection: str, document_id: str) -> dict[str, Any] | None:
        ...

    def query(
        self,
        collection: str,
        where: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        ...


class InMemoryDocumentStore:
    """Thread-safe document store kept in process memory."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    def create(self, collection: str, payload: dict[str, Any]) -> str:
        document_id = uuid4().hex
        now = datetime.now(timezone.utc)
        document = {
            key: (now if value is SERVER_TIMESTAMP else copy.deepcopy(value))
            for key, value in payload.items()
        }
        document["id"] = document_id
        with self._lock:
            documents = self._collections.setdefault(collection, {})
            documents[document_id] = document
            try:
                self._after_write()
            except Exception:
                del documents[document_id]
                if not documents:
                    del self._collections[collection]
                raise
        logger.debug("Created document %s in %s", document_id, collection)
        return document_id

    def get(self, collection: str, document_id: str) -> dict[str, Any] | None:
        with self._lock:
            document = self._collections.get(collection, {}).get(document_id)
            return copy.deepcopy(document) if document is not None else None

    def query(
        self,
        collection: str,
        where: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        with self._lock:
            documents = [copy.deepcopy(doc) for doc in self._collections.get(collection, {}).values()]

        if where:
            documents = [
                doc for doc in documents if all(doc.get(key) == value for key, value in where.items())
            ]
        if order_by:
            # Documents missing the field sort last regardless of direction.
            present = [doc for doc in documents if doc.get(order_by) is not None]
            missing = [doc for doc in documents if doc.get(order_by) is None]
            present.sort(key=lambda doc: doc[order_by], reverse=descending)
            documents = present + missing
        return documents

    def _after_write(self) -> None:
        """Hook invoked with the lock held after every insert; raising rolls the insert back."""


class JsonFileDocumentStore(InMemoryDocumentStore):
    """Document store that persists all collections to a single JSON file."""

    _DATE_KEY = "$date"

    def __init__(self, file_path: Path) -> None:
        super().__init__()
        self._file_path = file_path.resolve()
        if self._file_path.exists():
            text = self._file_path.read_text(encoding="utf-8")
            self._collections = json.loads(text, object_hook=self._decode) if text.strip() else {}
            logger.info("Loaded document store from %s", self._file_path)

    @property
    def file_path(self) -> Path:
        return self._file_path

    def _after_write(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        document = json.dumps(self._collections, default=self._encode, indent=2)
        self._file_path.write_text(document, encoding="utf-8")

    @classmethod
    def _encode(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return {cls._DATE_KEY: value.isoformat()}
        raise TypeError(f"Cannot serialize {type(value).__name__} to JSON")

    @classmethod
    def _decode(cls, obj: dict[str, Any]) -> Any:
        if len(obj) == 1 and cls._DATE_KEY in obj:
            return datetime.fromisoformat(obj[cls._DATE_KEY])
        return obj
