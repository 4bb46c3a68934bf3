"""SOP document status transitions."""

from __future__ import annotations

import logging

from core.errors import InvalidTransition
from persistence.contracts import RecordStore
from persistence.models import SopRecord, SopStatus, parse_timestamp

logger = logging.getLogger(__name__)

SOP_TRANSITIONS: dict[str, frozenset[str]] = {
    "private": frozenset({"submitted"}),
    "submitted": frozenset({"approved", "rejected"}),
    "approved": frozenset(),
    "rejected": frozenset(),
}


def can_transition(current: str, target: str) -> bool:
    return target in SOP_TRANSITIONS.get(current, frozenset())


class SopLifecycle:
    def __init__(self, store: RecordStore[SopRecord]) -> None:
        self._store = store

    def create(self, owner_id: str, name: str, stage: str, notes: str = "") -> SopRecord:
        record = self._store.append(
            {
                "owner_id": owner_id,
                "name": name,
                "stage": stage,
                "notes": notes,
                "status": "private",
            }
        )
        logger.info("SOP created id=%s owner=%s", record.id, owner_id)
        return record

    def submit(self, sop_id: str, owner_id: str) -> SopRecord:
        """Move an owner's private SOP to ``submitted``.

        A SOP owned by someone else raises ``NotFound`` exactly like a missing one.
        """
        record = self._store.update(
            sop_id, self._transition("submitted", stamp="submitted_at"), owner_id=owner_id
        )
        logger.info("SOP submitted id=%s owner=%s", sop_id, owner_id)
        return record

    def approve(self, sop_id: str) -> SopRecord:
        record = self._store.update(sop_id, self._transition("approved", stamp="approved_at"))
        logger.info("SOP approved id=%s", sop_id)
        return record

    def reject(self, sop_id: str) -> SopRecord:
        record = self._store.update(sop_id, self._transition("rejected"))
        logger.info("SOP rejected id=%s", sop_id)
        return record

    def list_for_owner(self, owner_id: str, limit: object = None) -> list[SopRecord]:
        # store order is newest insert first; sorted() keeps it for equal timestamps
        records = self._store.filter(lambda record: record.owner_id == owner_id)
        ordered = sorted(records, key=lambda record: parse_timestamp(record.updated_at), reverse=True)
        return ordered[: self._store.resolve_limit(limit)]

    def _transition(self, target: SopStatus, *, stamp: str | None = None):
        def mutate(record: SopRecord) -> dict[str, str]:
            if not can_transition(record.status, target):
                raise InvalidTransition(record.id, record.status, target)
            now = self._store.now()
            changes = {"status": target, "updated_at": now}
            if stamp:
                changes[stamp] = now
            return changes

        return mutate


__all__ = ["SOP_TRANSITIONS", "SopLifecycle", "can_transition"]
