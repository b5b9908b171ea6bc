"""Entity store: named collections of JSON records persisted as one document each.

Every mutation goes through ``mutate`` which runs load, change and save as a
single critical section per collection, so two concurrent writers can no
longer overwrite each other's changes.
"""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from threading import Lock
from typing import Any, TypeVar

from backend.core.errors import StorageCorrupt

logger = logging.getLogger(__name__)

Record = dict[str, Any]
T = TypeVar('T')


def decode_payload(collection: str, payload: str) -> list[Record]:
    try:
        records = json.loads(payload)
    except (TypeError, ValueError) as exc:
        raise StorageCorrupt(f'Collection {collection!r} is not valid JSON') from exc

    if not isinstance(records, list) or not all(isinstance(record, dict) for record in records):
        raise StorageCorrupt(f'Collection {collection!r} is not a JSON array of records')

    return records


def next_id(records: Iterable[Mapping[str, Any]], issued: int = 0) -> int:
    """Return the next identifier for a collection.

    ``issued`` is the highest id ever handed out, so ids freed by deleting the
    newest record are not handed out again.
    """
    seen: set[int] = set()
    for record in records:
        record_id = record.get('id')
        if not isinstance(record_id, int) or isinstance(record_id, bool):
            raise StorageCorrupt(f'Record has a non-integer id: {record_id!r}')
        if record_id in seen:
            raise StorageCorrupt(f'Duplicate id {record_id} in collection')
        seen.add(record_id)

    return max(max(seen, default=0), issued) + 1


class Batch:
    """Mutable view of a collection handed to a ``mutate`` callback."""

    def __init__(self, records: list[Record], issued: int = 0):
        self.records = records
        self.issued = issued

    def next_id(self) -> int:
        new_id = next_id(self.records, self.issued)
        self.issued = new_id
        return new_id

    def index_of(self, record_id: int) -> int | None:
        for index, record in enumerate(self.records):
            if record.get('id') == record_id:
                return index
        return None

    def find(self, record_id: int) -> Record | None:
        index = self.index_of(record_id)
        return None if index is None else self.records[index]


class EntityStore(ABC):
    def __init__(self):
        self._locks: dict[str, Lock] = {}
        self._locks_guard = Lock()

    def _lock_for(self, collection: str) -> Lock:
        with self._locks_guard:
            if collection not in self._locks:
                self._locks[collection] = Lock()
            return self._locks[collection]

    @abstractmethod
    def initialize(self, seeds: Mapping[str, list[Record]]) -> None:
        """Create backing storage and write each seed whose document is absent."""

    @abstractmethod
    def load(self, collection: str) -> list[Record]:
        ...

    @abstractmethod
    def _read_issued(self, collection: str) -> int:
        """Highest id ever issued in ``collection``, 0 when unknown."""

    @abstractmethod
    def _write(self, collection: str, records: list[Record], issued: int) -> None:
        """Replace the whole document in one step."""

    def _persist(self, collection: str, records: list[Record], issued: int) -> None:
        issued = max(issued, next_id(records) - 1)
        self._write(collection, records, issued)

    def save(self, collection: str, records: list[Record]) -> None:
        # Not reentrant: never call from inside a mutate callback.
        with self._lock_for(collection):
            self._persist(collection, records, self._read_issued(collection))

    def mutate(self, collection: str, fn: Callable[[Batch], T]) -> T:
        with self._lock_for(collection):
            batch = Batch(self.load(collection), self._read_issued(collection))
            result = fn(batch)
            self._persist(collection, batch.records, batch.issued)
            logger.debug('Saved %d records to %s', len(batch.records), collection)
            return result

    def collection(self, name: str) -> 'Collection':
        return Collection(self, name)


class Collection:
    """Handle bound to a single collection of a store."""

    def __init__(self, store: EntityStore, name: str):
        self.store = store
        self.name = name

    def load(self) -> list[Record]:
        return self.store.load(self.name)

    def mutate(self, fn: Callable[[Batch], T]) -> T:
        return self.store.mutate(self.name, fn)

    def get(self, record_id: int) -> Record | None:
        for record in self.load():
            if record.get('id') == record_id:
                return record
        return None
