"""Store registry: builds, loads and shuts down every record store."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from core.config import Settings
from persistence.models import (
    ChatRecord,
    EntitlementRecord,
    IntakeRecord,
    RoyaltyLedgerEntry,
    SopRecord,
)
from persistence.record_store import BoundedRecordStore, StoreSpec, now_iso

logger = logging.getLogger(__name__)

SNAPSHOT_FILES = {
    "intake": "intake.json",
    "chat": "chat.json",
    "sops": "sops.json",
    "entitlements": "entitlements.json",
    "royalties": "royalties.json",
}


def build_specs(settings: Settings) -> dict[str, StoreSpec]:
    return {
        "intake": StoreSpec(
            name="intake",
            model=IntakeRecord,
            cap=settings.intake_cap,
            id_prefix="intake",
            created_field="received_at",
        ),
        "chat": StoreSpec(
            name="chat",
            model=ChatRecord,
            cap=settings.chat_cap,
            id_prefix="chat",
            created_field="created_at",
        ),
        "sops": StoreSpec(
            name="sops",
            model=SopRecord,
            cap=settings.sop_cap,
            id_prefix="sop",
            created_field="created_at",
            updated_field="updated_at",
            owner_field="owner_id",
        ),
        "entitlements": StoreSpec(
            name="entitlements",
            model=EntitlementRecord,
            cap=settings.entitlement_cap,
            id_prefix="ent",
            created_field="purchased_at",
            owner_field="user_id",
        ),
        "royalties": StoreSpec(
            name="royalties",
            model=RoyaltyLedgerEntry,
            cap=settings.royalty_cap,
            id_prefix="roy",
            created_field="created_at",
            owner_field="creator_id",
        ),
    }


class StoreRegistry:
    def __init__(self, settings: Settings, *, clock=now_iso) -> None:
        self._base_dir = Path(settings.data_dir)
        specs = build_specs(settings)
        self._stores: dict[str, BoundedRecordStore] = {
            name: BoundedRecordStore(
                spec,
                self._base_dir / SNAPSHOT_FILES[name],
                page_default=settings.list_default_limit,
                page_ceiling=settings.list_max_limit,
                clock=clock,
            )
            for name, spec in specs.items()
        }

    @property
    def intake(self) -> BoundedRecordStore[IntakeRecord]:
        return self._stores["intake"]

    @property
    def chat(self) -> BoundedRecordStore[ChatRecord]:
        return self._stores["chat"]

    @property
    def sops(self) -> BoundedRecordStore[SopRecord]:
        return self._stores["sops"]

    @property
    def entitlements(self) -> BoundedRecordStore[EntitlementRecord]:
        return self._stores["entitlements"]

    @property
    def royalties(self) -> BoundedRecordStore[RoyaltyLedgerEntry]:
        return self._stores["royalties"]

    def open(self) -> dict[str, str]:
        """Load every snapshot; unreadable files leave that store empty."""
        statuses = {name: store.load() for name, store in self._stores.items()}
        logger.info("Stores opened from %s: %s", self._base_dir, statuses)
        return statuses

    def drain(self, timeout: float | None = None) -> bool:
        return all(store.drain(timeout) for store in self._stores.values())

    def close(self, timeout: float | None = None) -> None:
        for store in self._stores.values():
            store.close(timeout)
        logger.info("Stores closed")

    def stats(self) -> list[dict[str, Any]]:
        return [store.stats().as_dict() for store in self._stores.values()]

    def __enter__(self) -> "StoreRegistry":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["SNAPSHOT_FILES", "StoreRegistry", "build_specs"]
