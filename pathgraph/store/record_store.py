"""Record stores - Document collections backing the path point and edge stores.

A record store holds named collections of JSON-compatible records keyed by a
store-assigned id. PathPointStore and PathEdgeStore only talk to it through
the RecordStore interface:

- insert / insert_if_absent: add a record, returning its id
- get_by_id / scan_all / query_equals: reads (records include their "id")
- merge_update / merge_update_if_absent / delete: writes
- open / close: explicit lifecycle, owned by whoever constructed the store

Implementations:
- InMemoryRecordStore: dict-backed, for tests and embedding
- JsonFileRecordStore: InMemoryRecordStore persisted to a JSON document

insert_if_absent() and merge_update_if_absent() are compare-and-write
operations performed under the store lock, so two concurrent callers can never
both end up with a record matching the same key.

A write that fails to persist is rolled back in memory before StoreError is
raised.
"""

import json
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

from pathgraph.constants import RecordFields, StoreConfig
from pathgraph.errors import NotFoundError, StoreError

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class RecordStore(ABC):
    """Abstract document store with per-collection scan and point lookup."""

    @abstractmethod
    def open(self) -> None:
        """Acquire underlying resources. Must be called before any other operation."""
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Release underlying resources."""
        raise NotImplementedError

    @abstractmethod
    def insert(self, collection: str, record: Record) -> str:
        """Insert a record and return its new id."""
        raise NotImplementedError

    @abstractmethod
    def insert_if_absent(self, collection: str, record: Record, match: dict[str, Any]) -> Optional[str]:
        """Insert unless a record with all `match` field values exists.

        Returns:
            New id, or None if a matching record already exists.
        """
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, collection: str, record_id: str) -> Optional[Record]:
        raise NotImplementedError

    @abstractmethod
    def scan_all(self, collection: str) -> list[Record]:
        raise NotImplementedError

    @abstractmethod
    def query_equals(self, collection: str, field: str, value: Any) -> list[Record]:
        raise NotImplementedError

    @abstractmethod
    def merge_update(self, collection: str, record_id: str, fields: Record) -> None:
        """Merge fields into an existing record.

        Raises:
            NotFoundError: If the record does not exist.
        """
        raise NotImplementedError

    @abstractmethod
    def merge_update_if_absent(
        self, collection: str, record_id: str, fields: Record, match: dict[str, Any]
    ) -> bool:
        """Merge fields into a record unless another record has all `match` field values.

        Returns:
            True if the update was applied, False if another record matches.

        Raises:
            NotFoundError: If the record does not exist.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, collection: str, record_id: str) -> None:
        """Remove a record. Deleting a missing record is not an error."""
        raise NotImplementedError

    def __enter__(self) -> "RecordStore":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class InMemoryRecordStore(RecordStore):
    """Dict-backed record store.

    Ids are a collection prefix plus a zero-padded counter ("P000001"), so
    lexicographic id order equals creation order. All operations are guarded
    by one re-entrant lock.

    Example:
        store = InMemoryRecordStore()
        store.open()
        point_id = store.insert("pathPoints", {"latitude": 1.0, "longitude": 2.0})
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._collections: dict[str, dict[str, Record]] = {}
        self._counters: dict[str, int] = {}
        self._is_open = False

    @property
    def is_open(self) -> bool:
        return self._is_open

    def open(self) -> None:
        with self._lock:
            self._is_open = True

    def close(self) -> None:
        with self._lock:
            self._is_open = False

    def _require_open(self) -> None:
        if not self._is_open:
            raise StoreError(f"{type(self).__name__} is not open")

    def _collection(self, collection: str) -> dict[str, Record]:
        return self._collections.setdefault(collection, {})

    def _next_id(self, collection: str) -> str:
        self._counters[collection] = self._counters.get(collection, 0) + 1
        prefix = StoreConfig.ID_PREFIXES.get(collection, StoreConfig.DEFAULT_ID_PREFIX)
        return f"{prefix}{self._counters[collection]:0{StoreConfig.ID_DIGITS}d}"

    @staticmethod
    def _with_id(record_id: str, record: Record) -> Record:
        return {**record, RecordFields.ID: record_id}

    def _after_write(self) -> None:
        """Hook for persistent subclasses, called with the lock held."""

    @contextmanager
    def _writing(self, collection: str) -> Iterator[dict[str, Record]]:
        """Yield a collection for mutation; restore it if persisting fails.

        Records are replaced, never mutated in place, so a shallow copy of the
        collection is a complete snapshot.
        """
        records = self._collection(collection)
        snapshot = dict(records)
        counters = dict(self._counters)
        try:
            yield records
            self._after_write()
        except StoreError:
            self._collections[collection] = snapshot
            self._counters = counters
            raise

    def insert(self, collection: str, record: Record) -> str:
        with self._lock:
            self._require_open()
            with self._writing(collection) as records:
                record_id = self._next_id(collection)
                records[record_id] = {k: v for k, v in record.items() if k != RecordFields.ID}
            return record_id

    def insert_if_absent(self, collection: str, record: Record, match: dict[str, Any]) -> Optional[str]:
        with self._lock:
            self._require_open()
            for data in self._collection(collection).values():
                if all(data.get(k) == v for k, v in match.items()):
                    return None
            return self.insert(collection=collection, record=record)

    def get_by_id(self, collection: str, record_id: str) -> Optional[Record]:
        with self._lock:
            self._require_open()
            data = self._collection(collection).get(record_id)
            return None if data is None else self._with_id(record_id, data)

    def scan_all(self, collection: str) -> list[Record]:
        with self._lock:
            self._require_open()
            return [self._with_id(rid, data) for rid, data in self._collection(collection).items()]

    def query_equals(self, collection: str, field: str, value: Any) -> list[Record]:
        with self._lock:
            self._require_open()
            return [
                self._with_id(rid, data) for rid, data in self._collection(collection).items() if data.get(field) == value
            ]

    def merge_update(self, collection: str, record_id: str, fields: Record) -> None:
        with self._lock:
            self._require_open()
            if record_id not in self._collection(collection):
                raise NotFoundError(kind="record", id=record_id)
            with self._writing(collection) as records:
                records[record_id] = {
                    **records[record_id],
                    **{k: v for k, v in fields.items() if k != RecordFields.ID},
                }

    def merge_update_if_absent(
        self, collection: str, record_id: str, fields: Record, match: dict[str, Any]
    ) -> bool:
        with self._lock:
            self._require_open()
            for rid, data in self._collection(collection).items():
                if rid != record_id and all(data.get(k) == v for k, v in match.items()):
                    return False
            self.merge_update(collection=collection, record_id=record_id, fields=fields)
            return True

    def delete(self, collection: str, record_id: str) -> None:
        with self._lock:
            self._require_open()
            if record_id not in self._collection(collection):
                return
            with self._writing(collection) as records:
                del records[record_id]

    def to_dict(self) -> dict[str, Any]:
        """Snapshot of all collections and id counters."""
        with self._lock:
            return {
                "version": "1.0",
                "collections": {name: dict(records) for name, records in self._collections.items()},
                "counters": dict(self._counters),
            }

    def load_dict(self, data: dict[str, Any]) -> None:
        """Replace contents with a snapshot produced by to_dict()."""
        with self._lock:
            self._collections = {name: dict(records) for name, records in data["collections"].items()}
            self._counters = {name: int(count) for name, count in data["counters"].items()}


class JsonFileRecordStore(InMemoryRecordStore):
    """Record store persisted to a single JSON document.

    open() loads the file if it exists; every write and close() save it back.
    File and decoding problems surface as StoreError.

    Example:
        with JsonFileRecordStore(path=Path("data/graph.json")) as store:
            store.insert("pathPoints", {"latitude": 1.0, "longitude": 2.0})
    """

    def __init__(self, path: Path = StoreConfig.JSON_STORE_PATH) -> None:
        super().__init__()
        self.path = Path(path)

    def open(self) -> None:
        with self._lock:
            if self.path.exists():
                try:
                    with open(self.path, "r", encoding="utf-8") as f:
                        self.load_dict(data=json.load(f))
                except (OSError, ValueError, KeyError, TypeError) as e:
                    raise StoreError(f"Failed to load record store {self.path}: {e}") from e
                logger.info(f"Loaded record store from {self.path}")
            super().open()

    def close(self) -> None:
        with self._lock:
            try:
                if self._is_open:
                    self._save()
            finally:
                super().close()

    def _after_write(self) -> None:
        self._save()

    def _save(self) -> None:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=StoreConfig.JSON_INDENT)
            tmp_path.replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            raise StoreError(f"Failed to save record store {self.path}: {e}") from e
