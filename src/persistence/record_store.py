"""Bounded, snapshot-backed in-memory record store."""

from __future__ import annotations

import logging
import math
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Generic, Iterator, Mapping, TypeVar
from uuid import uuid4

from core.errors import NotFound, PersistenceFailure
from persistence.models import StoredRecord
from persistence.snapshot import LoadStatus, load_snapshot, write_snapshot
from persistence.write_queue import WriteQueue
from schemas.validation import validate_payload

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=StoredRecord)

DEFAULT_PAGE_LIMIT = 20
DEFAULT_PAGE_CEILING = 50


@dataclass(frozen=True)
class StoreSpec(Generic[RecordT]):
    """Static description of one entity kind."""

    name: str
    model: type[RecordT]
    cap: int
    id_prefix: str
    created_field: str
    updated_field: str | None = None
    owner_field: str | None = None


@dataclass(frozen=True)
class StoreStats:
    name: str
    path: str
    count: int
    cap: int
    load_status: LoadStatus | None
    flushes: int
    flush_failures: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "count": self.count,
            "cap": self.cap,
            "loadStatus": self.load_status,
            "flushes": self.flushes,
            "flushFailures": self.flush_failures,
        }


def parse_limit(
    raw: object,
    *,
    default: int = DEFAULT_PAGE_LIMIT,
    ceiling: int = DEFAULT_PAGE_CEILING,
) -> int:
    """Turn an untrusted limit into ``1..ceiling``; junk falls back to ``default``."""
    if raw is None or isinstance(raw, bool):
        return min(default, ceiling)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return min(default, ceiling)
    if not math.isfinite(value) or value <= 0:
        return min(default, ceiling)
    value = int(value)
    if value < 1:
        return min(default, ceiling)
    return min(value, ceiling)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_record_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex}"


class BoundedRecordStore(Generic[RecordT]):
    """Most-recent-first records of one kind, capped and mirrored to a JSON file.

    Memory is the source of truth while the process runs. Every mutation
    schedules a full-snapshot flush on the store's write queue and returns
    without waiting for it.
    """

    def __init__(
        self,
        spec: StoreSpec[RecordT],
        path: str | Path,
        *,
        page_default: int = DEFAULT_PAGE_LIMIT,
        page_ceiling: int = DEFAULT_PAGE_CEILING,
        clock: Callable[[], str] = now_iso,
    ) -> None:
        if spec.cap < 1:
            raise ValueError(f"Store cap must be >= 1: {spec.cap}")
        self._spec = spec
        self._path = Path(path)
        self._page_default = page_default
        self._page_ceiling = page_ceiling
        self._clock = clock
        self._lock = threading.RLock()
        self._records: list[RecordT] = []
        self._queue = WriteQueue(spec.name)
        self._load_status: LoadStatus | None = None

    @property
    def spec(self) -> StoreSpec[RecordT]:
        return self._spec

    @property
    def name(self) -> str:
        return self._spec.name

    @property
    def path(self) -> Path:
        return self._path

    @property
    def cap(self) -> int:
        return self._spec.cap

    @property
    def load_status(self) -> LoadStatus | None:
        return self._load_status

    def now(self) -> str:
        return self._clock()

    def load(self) -> LoadStatus:
        """Seed memory from the snapshot file, replacing current contents."""
        result = load_snapshot(self._path, self._spec.model, cap=self._spec.cap)
        with self._lock:
            self._records = list(result.records)
            self._load_status = result.status
        return result.status

    def append(self, record: RecordT | Mapping[str, Any]) -> RecordT:
        """Validate, stamp and insert at the head; trims the tail beyond the cap."""
        self._ensure_open()
        stored = self._build(record)
        with self._lock:
            self._records.insert(0, stored)
            if len(self._records) > self._spec.cap:
                del self._records[self._spec.cap :]
        self.flush()
        return stored

    def resolve_limit(self, limit: object = None) -> int:
        return parse_limit(limit, default=self._page_default, ceiling=self._page_ceiling)

    def list(self, limit: object = None) -> list[RecordT]:
        size = self.resolve_limit(limit)
        with self._lock:
            return self._records[:size]

    def list_for_owner(self, owner_id: str, limit: object = None) -> list[RecordT]:
        size = self.resolve_limit(limit)
        return self.filter(lambda record: self._owned_by(record, owner_id))[:size]

    def find(self, predicate: Callable[[RecordT], bool]) -> RecordT | None:
        with self._lock:
            for record in self._records:
                if predicate(record):
                    return record
        return None

    def filter(self, predicate: Callable[[RecordT], bool]) -> list[RecordT]:
        with self._lock:
            return [record for record in self._records if predicate(record)]

    def get(self, record_id: str, *, owner_id: str | None = None) -> RecordT:
        record = self.find(lambda item: self._matches(item, record_id, owner_id))
        if record is None:
            raise NotFound(self._spec.name, record_id)
        return record

    def update(
        self,
        record_id: str,
        mutator: Callable[[RecordT], Mapping[str, Any]],
        *,
        owner_id: str | None = None,
    ) -> RecordT:
        """Replace a record with ``mutator``'s changes applied.

        The lookup is scoped to ``owner_id`` when given; a record owned by
        someone else is reported as missing. If the mutator raises, the store
        is left untouched.
        """
        self._ensure_open()
        with self._lock:
            index = self._index_of(record_id, owner_id)
            if index is None:
                raise NotFound(self._spec.name, record_id)
            current = self._records[index]
            changes = dict(mutator(current))
            if self._spec.updated_field:
                changes.setdefault(self._spec.updated_field, self._clock())
            merged = current.model_dump()
            merged.update(changes)
            merged["id"] = current.id
            updated = validate_payload(self._spec.model, merged).unwrap(
                f"Invalid {self._spec.name} update"
            )
            self._records[index] = updated
        self.flush()
        return updated

    def snapshot(self) -> list[RecordT]:
        with self._lock:
            return list(self._records)

    def flush(self) -> Future:
        """Schedule a write of the current snapshot."""
        return self._queue.schedule(self._write)

    def drain(self, timeout: float | None = None) -> bool:
        return self._queue.drain(timeout)

    def close(self, timeout: float | None = None) -> None:
        self._queue.close(timeout)

    def stats(self) -> StoreStats:
        return StoreStats(
            name=self._spec.name,
            path=str(self._path),
            count=len(self),
            cap=self._spec.cap,
            load_status=self._load_status,
            flushes=self._queue.completed,
            flush_failures=self._queue.failures,
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[RecordT]:
        return iter(self.snapshot())

    def _ensure_open(self) -> None:
        if self._queue.closed:
            raise RuntimeError(f"Store {self._spec.name} is closed")

    def _write(self) -> None:
        records = self.snapshot()
        try:
            write_snapshot(self._path, records)
        except OSError as exc:
            raise PersistenceFailure(f"Could not write {self._path}: {exc}") from exc

    def _build(self, record: RecordT | Mapping[str, Any]) -> RecordT:
        if isinstance(record, self._spec.model):
            return record
        data = dict(record)
        if not _has_field(data, self._spec.model, "id"):
            data["id"] = new_record_id(self._spec.id_prefix)
        stamp = self._clock()
        if not _has_field(data, self._spec.model, self._spec.created_field):
            data[self._spec.created_field] = stamp
        if self._spec.updated_field and not _has_field(
            data, self._spec.model, self._spec.updated_field
        ):
            data[self._spec.updated_field] = data.get(self._spec.created_field, stamp)
        return validate_payload(self._spec.model, data).unwrap(f"Invalid {self._spec.name} record")

    def _index_of(self, record_id: str, owner_id: str | None) -> int | None:
        for index, record in enumerate(self._records):
            if self._matches(record, record_id, owner_id):
                return index
        return None

    def _matches(self, record: RecordT, record_id: str, owner_id: str | None) -> bool:
        if record.id != record_id:
            return False
        return owner_id is None or self._owned_by(record, owner_id)

    def _owned_by(self, record: RecordT, owner_id: str) -> bool:
        if self._spec.owner_field is None:
            raise TypeError(f"Store {self._spec.name} has no owner field")
        return getattr(record, self._spec.owner_field) == owner_id


def _has_field(data: Mapping[str, Any], model: type[StoredRecord], name: str) -> bool:
    alias = model.model_fields[name].alias or name
    return bool(data.get(name)) or bool(data.get(alias))


__all__ = [
    "BoundedRecordStore",
    "StoreSpec",
    "StoreStats",
    "new_record_id",
    "now_iso",
    "parse_limit",
]
