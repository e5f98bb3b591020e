"""
In‑memory record store.

Each record kind is held in a ``RecordCollection``: an ordered list of
plain dictionaries keyed by a string ``id``.  ``ResourceStore`` owns one
collection per kind and is the object the API layer receives at
startup.  Nothing is persisted; all data is lost when the process
exits.

Records handed out by the store are deep copies, so callers can never
change stored state except through ``insert``, ``update`` and
``delete``.  Mutations take effect immediately.
"""

from __future__ import annotations

import copy
import itertools
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .resources import BUDDIES, RESOURCE_KINDS, SEED_RECORDS, ResourceKind

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class RecordNotFound(LookupError):
    """Raised when no record matches the requested id or field value."""

    def __init__(self, kind: ResourceKind, field: str, value: Any) -> None:
        self.kind = kind
        self.field = field
        self.value = value
        super().__init__(f"{kind.label} not found")

    @property
    def message(self) -> str:
        return f"{self.kind.label} not found"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class RecordCollection:
    """Ordered collection of records of a single kind.

    Ids are drawn from a monotonic counter; ids already taken (seeded
    or supplied by a caller) are skipped, so ``id`` stays unique within
    the collection.
    """

    def __init__(self, kind: ResourceKind) -> None:
        self.kind = kind
        self._records: List[Record] = []
        self._counter = itertools.count(1)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._records)

    # ------------------------------------------------------------------
    # Helpers (callers hold the lock)
    # ------------------------------------------------------------------
    def _index_of(self, record_id: str) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.get("id") == record_id:
                return index
        return None

    def _next_id(self) -> str:
        while True:
            candidate = str(next(self._counter))
            if self._index_of(candidate) is None:
                return candidate

    def _claim_id(self, requested: Any) -> str:
        if requested is None:
            return self._next_id()
        requested = str(requested)
        if not requested:
            logger.debug("Empty %s id supplied; generating a new id", self.kind.label.lower())
        elif self._index_of(requested) is None:
            return requested
        else:
            logger.warning(
                "%s id %r is already in use; generating a new id",
                self.kind.label,
                requested,
            )
        return self._next_id()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def all(self) -> List[Record]:
        """Return every record in insertion order."""
        with self._lock:
            return copy.deepcopy(self._records)

    def get(self, record_id: str) -> Record:
        """Return the record with ``record_id`` or raise ``RecordNotFound``."""
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                raise RecordNotFound(self.kind, "id", record_id)
            return copy.deepcopy(self._records[index])

    def find_by(self, field: str, value: Any) -> Record:
        """Return the first record whose ``field`` equals ``value``.

        Values are compared exactly; ``RecordNotFound`` is raised when
        nothing matches.
        """
        with self._lock:
            for record in self._records:
                if field in record and record[field] == value:
                    return copy.deepcopy(record)
        raise RecordNotFound(self.kind, field, value)

    def filter_by(self, field: str, value: Any) -> List[Record]:
        """Return all records whose ``field`` equals ``value``, possibly none."""
        with self._lock:
            return [
                copy.deepcopy(record)
                for record in self._records
                if field in record and record[field] == value
            ]

    def pending_for(self, user_id: str) -> List[Record]:
        """Return pending connections in which ``user_id`` is either party."""
        with self._lock:
            return [
                copy.deepcopy(record)
                for record in self._records
                if (record.get("user_id") == user_id or record.get("buddy_id") == user_id)
                and record.get("status") == "pending"
            ]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def insert(self, payload: Mapping[str, Any]) -> Record:
        """Store a new record built from ``payload`` and return it.

        A caller‑supplied ``id`` is kept when it is free; otherwise a
        fresh one is generated.  ``created_at`` is always set by the
        store.
        """
        with self._lock:
            record: Record = {"id": self._claim_id(payload.get("id"))}
            record.update(
                (field, copy.deepcopy(value)) for field, value in payload.items() if field != "id"
            )
            record["created_at"] = _timestamp()
            self._records.append(record)
            logger.info("Created %s %s", self.kind.label.lower(), record["id"])
            return copy.deepcopy(record)

    def update(self, record_id: str, changes: Mapping[str, Any]) -> Record:
        """Merge ``changes`` into the stored record and return the result.

        Fields not present in ``changes`` keep their values.  An ``id``
        in ``changes`` is ignored; ids are never reassigned.
        """
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                raise RecordNotFound(self.kind, "id", record_id)
            if "id" in changes and changes["id"] != record_id:
                logger.debug(
                    "Ignoring id %r in update of %s %s",
                    changes["id"],
                    self.kind.label.lower(),
                    record_id,
                )
            record = self._records[index]
            record.update(
                (field, copy.deepcopy(value)) for field, value in changes.items() if field != "id"
            )
            record["updated_at"] = _timestamp()
            logger.info("Updated %s %s", self.kind.label.lower(), record_id)
            return copy.deepcopy(record)

    def delete(self, record_id: str) -> Record:
        """Remove the record with ``record_id`` and return it."""
        with self._lock:
            index = self._index_of(record_id)
            if index is None:
                raise RecordNotFound(self.kind, "id", record_id)
            removed = self._records.pop(index)
            logger.info("Deleted %s %s", self.kind.label.lower(), record_id)
            return removed

    def load(self, records: Iterable[Mapping[str, Any]]) -> None:
        """Bulk insert records, e.g. seed data, keeping their ids."""
        for record in records:
            self.insert(record)


class ResourceStore:
    """Process‑wide state: one ``RecordCollection`` per record kind.

    Operations address a collection by its kind name (``"workouts"``)
    and otherwise mirror the ``RecordCollection`` methods.
    """

    def __init__(self, kinds: Iterable[ResourceKind] = RESOURCE_KINDS) -> None:
        self._collections: Dict[str, RecordCollection] = {
            kind.name: RecordCollection(kind) for kind in kinds
        }

    @classmethod
    def seeded(cls, seed: Optional[Mapping[str, Iterable[Mapping[str, Any]]]] = None) -> "ResourceStore":
        """Create a store pre‑loaded with ``seed`` (the example data by default)."""
        store = cls()
        for name, records in (SEED_RECORDS if seed is None else seed).items():
            store.collection(name).load(records)
        return store

    @property
    def kinds(self) -> List[ResourceKind]:
        return [collection.kind for collection in self._collections.values()]

    def collection(self, name: str) -> RecordCollection:
        try:
            return self._collections[name]
        except KeyError:
            raise KeyError(f"Unknown record kind: {name}") from None

    def insert(self, name: str, payload: Mapping[str, Any]) -> Record:
        return self.collection(name).insert(payload)

    def get_all(self, name: str) -> List[Record]:
        return self.collection(name).all()

    def get(self, name: str, record_id: str) -> Record:
        return self.collection(name).get(record_id)

    def find_by(self, name: str, field: str, value: Any) -> Record:
        return self.collection(name).find_by(field, value)

    def filter_by(self, name: str, field: str, value: Any) -> List[Record]:
        return self.collection(name).filter_by(field, value)

    def pending_for(self, name: str, user_id: str) -> List[Record]:
        return self.collection(name).pending_for(user_id)

    def pending_buddy_requests(self, user_id: str) -> List[Record]:
        return self.pending_for(BUDDIES.name, user_id)

    def update(self, name: str, record_id: str, changes: Mapping[str, Any]) -> Record:
        return self.collection(name).update(record_id, changes)

    def delete(self, name: str, record_id: str) -> Record:
        return self.collection(name).delete(record_id)
