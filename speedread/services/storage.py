"""Key-value store backends for persisted reader state."""

import logging
from typing import Optional, Protocol

from sqlalchemy.orm import sessionmaker

from speedread.database import create_db_engine, create_session_factory
from speedread.models.store import StoreEntry

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal string store the progress adapter reads from and writes to."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemoryStore:
    """Dictionary-backed store for tests and hosts without persistence."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class SqlKeyValueStore:
    """Store backed by a single SQLAlchemy table."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @classmethod
    def from_url(cls, database_url: str) -> "SqlKeyValueStore":
        """Create a store (and its table) for a database URL."""
        engine = create_db_engine(database_url)
        logger.info("Opening key-value store at %s", engine.url)
        return cls(create_session_factory(engine))

    def get(self, key: str) -> Optional[str]:
        with self._session_factory() as session:
            entry = session.get(StoreEntry, key)
            return entry.value if entry is not None else None

    def set(self, key: str, value: str) -> None:
        with self._session_factory() as session:
            entry = session.get(StoreEntry, key)
            if entry is None:
                session.add(StoreEntry(key=key, value=value))
            else:
                entry.value = value
            session.commit()

    def delete(self, key: str) -> None:
        with self._session_factory() as session:
            entry = session.get(StoreEntry, key)
            if entry is not None:
                session.delete(entry)
                session.commit()
