"""Persistence protocol contracts."""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Callable, Mapping, Protocol, TypeVar

from persistence.models import StoredRecord

RecordT = TypeVar("RecordT", bound=StoredRecord)


class RecordStore(Protocol[RecordT]):
    def append(self, record: RecordT | Mapping[str, Any]) -> RecordT: ...

    def resolve_limit(self, limit: object = None) -> int: ...

    def list(self, limit: object = None) -> list[RecordT]: ...

    def list_for_owner(self, owner_id: str, limit: object = None) -> list[RecordT]: ...

    def find(self, predicate: Callable[[RecordT], bool]) -> RecordT | None: ...

    def filter(self, predicate: Callable[[RecordT], bool]) -> list[RecordT]: ...

    def update(
        self,
        record_id: str,
        mutator: Callable[[RecordT], Mapping[str, Any]],
        *,
        owner_id: str | None = None,
    ) -> RecordT: ...

    def now(self) -> str: ...

    def flush(self) -> Future: ...


__all__ = ["RecordStore"]
