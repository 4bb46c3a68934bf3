"""Process-wide service wiring for CLI/API reuse."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.config import Settings
from persistence.manager import StoreRegistry
from services.catalog import Catalog, load_catalog
from services.chat_responder import ChatResponder
from services.ledger import Ledger
from services.sop_lifecycle import SopLifecycle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppServices:
    settings: Settings
    stores: StoreRegistry
    catalog: Catalog
    sops: SopLifecycle
    ledger: Ledger
    responder: ChatResponder

    def close(self, timeout: float | None = None) -> None:
        self.stores.close(timeout)


def build_services(settings: Settings, *, load: bool = True) -> AppServices:
    """Construct stores and services; ``load`` seeds stores from their snapshots."""
    stores = StoreRegistry(settings)
    if load:
        stores.open()
    catalog = load_catalog(settings.catalog_path)
    return AppServices(
        settings=settings,
        stores=stores,
        catalog=catalog,
        sops=SopLifecycle(stores.sops),
        ledger=Ledger(catalog, stores.entitlements, stores.royalties),
        responder=ChatResponder(),
    )


__all__ = ["AppServices", "build_services"]
