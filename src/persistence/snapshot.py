"""JSON snapshot files backing the record stores."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Generic, Literal, Sequence, TypeVar

from core.errors import LoadCorruption
from persistence.models import StoredRecord
from schemas.validation import validate_payload

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=StoredRecord)

LoadStatus = Literal["missing", "loaded", "corrupt"]


@dataclass(frozen=True)
class SnapshotLoad(Generic[RecordT]):
    status: LoadStatus
    records: list[RecordT] = field(default_factory=list)
    discarded: int = 0
    error: str | None = None


def load_snapshot(path: str | Path, model: type[RecordT], *, cap: int) -> SnapshotLoad[RecordT]:
    """Read a store snapshot; any bad element empties the whole load."""
    path = Path(path)
    if not path.exists():
        logger.info("No snapshot at %s, starting empty", path)
        return SnapshotLoad(status="missing")
    try:
        records = _parse_records(path, model)
    except LoadCorruption as exc:
        logger.warning("Discarding corrupt snapshot %s: %s", path, exc)
        return SnapshotLoad(status="corrupt", error=str(exc))

    discarded = max(0, len(records) - cap)
    kept = records[:cap]
    logger.info(
        "Loaded %d %s records from %s (%d beyond cap)",
        len(kept),
        model.__name__,
        path,
        discarded,
    )
    return SnapshotLoad(status="loaded", records=kept, discarded=discarded)


def write_snapshot(path: str | Path, records: Sequence[StoredRecord]) -> None:
    """Write the full snapshot to a temp file, then swap it into place."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [record.to_json() for record in records]
    temp = path.with_suffix(path.suffix + ".tmp")
    temp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    temp.replace(path)


def _parse_records(path: Path, model: type[RecordT]) -> list[RecordT]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise LoadCorruption(f"unreadable snapshot: {exc}") from exc
    if not isinstance(data, list):
        raise LoadCorruption("snapshot is not a JSON array")

    records: list[RecordT] = []
    for index, item in enumerate(data):
        outcome = validate_payload(model, item)
        if not outcome.ok:
            first = outcome.issues[0] if outcome.issues else None
            detail = f"{first.path}: {first.message}" if first else "invalid record"
            raise LoadCorruption(f"element {index} failed validation ({detail})")
        records.append(outcome.value)
    return records


__all__ = ["LoadStatus", "SnapshotLoad", "load_snapshot", "write_snapshot"]
