"""
Key-value storage for SmartFlora documents.

Every value is a JSON-serializable document (dicts, lists, strings,
numbers). Two backends are provided:

- MemoryKeyValueStore: isolated in-process storage for development and tests.
- SqlKeyValueStore: durable storage in a single SQLAlchemy table.

Both serialize on write and deserialize on read, so callers always get a
fresh copy and can never mutate stored state by accident.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

from sqlalchemy.orm import Session, sessionmaker

from smartflora.db_models import KeyValueEntry

logger = logging.getLogger(__name__)

# Document keys
# - smartflora_session: current Session or absent
# - smartflora_all_sessions: list of every Session seen on this device
# - smartflora_data: list of bound Pots
SESSION_KEY = "smartflora_session"
ALL_SESSIONS_KEY = "smartflora_all_sessions"
POTS_KEY = "smartflora_data"


class KeyValueStore(ABC):
    """Minimal interface shared by the storage backends."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the document stored under key, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a document under key, replacing any previous one."""

    @abstractmethod
    def set_many(self, documents: Mapping[str, Any]) -> None:
        """
        Store several documents at once.

        Either every document is written or, if any write fails, none of
        them is and the error is re-raised.
        """

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete the document under key. Missing keys are ignored."""


class MemoryKeyValueStore(KeyValueStore):
    """In-memory storage. Each instance is independent."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        # key -> JSON text
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def set_many(self, documents: Mapping[str, Any]) -> None:
        previous = {key: self._data.get(key) for key in documents}
        try:
            for key, value in documents.items():
                self.set(key, value)
        except Exception:
            # Roll back the documents written before the failure
            for key, raw in previous.items():
                if raw is None:
                    self._data.pop(key, None)
                else:
                    self._data[key] = raw
            raise

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class SqlKeyValueStore(KeyValueStore):
    """
    Storage backed by the kv_entries table.

    Every write opens its own database session and commits before
    returning, so state is durable once a call completes.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _session(self) -> Session:
        return self.session_factory()

    def get(self, key: str) -> Optional[Any]:
        with self._session() as db:
            entry = db.get(KeyValueEntry, key)
            if entry is None:
                return None
            return json.loads(str(entry.value))

    def set(self, key: str, value: Any) -> None:
        self.set_many({key: value})

    def set_many(self, documents: Mapping[str, Any]) -> None:
        """Write all documents in one transaction."""
        payloads = {key: json.dumps(value) for key, value in documents.items()}
        with self._session() as db:
            for key, payload in payloads.items():
                entry = db.get(KeyValueEntry, key)
                if entry is None:
                    db.add(KeyValueEntry(key=key, value=payload))
                else:
                    entry.value = payload  # type: ignore[assignment]
            db.commit()
        logger.debug(f"Stored documents {sorted(payloads)}")

    def remove(self, key: str) -> None:
        with self._session() as db:
            entry = db.get(KeyValueEntry, key)
            if entry is not None:
                db.delete(entry)
                db.commit()
