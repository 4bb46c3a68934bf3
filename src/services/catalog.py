"""Static SOP marketplace catalog."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class CatalogListing(BaseModel):
    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    price_label: str
    price_cents: int = Field(ge=0)
    provider_product_id: str = Field(min_length=1)
    royalty_percent: float = Field(ge=0, le=100)
    creator_id: str = Field(min_length=1)
    active: bool = True

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )


class CatalogView(BaseModel):
    listing: CatalogListing
    owned: bool

    model_config = ConfigDict(frozen=True)

    @property
    def locked(self) -> bool:
        return not self.owned

    def to_json(self) -> dict:
        payload = self.listing.model_dump(by_alias=True, mode="json")
        payload["owned"] = self.owned
        payload["locked"] = self.locked
        return payload


DEFAULT_LISTINGS: tuple[CatalogListing, ...] = (
    CatalogListing(
        id="sop_veg_feed_schedule",
        title="Veg room feed schedule (coco, 18/6)",
        price_label="$4.99",
        price_cents=499,
        provider_product_id="plantpilot.sop.veg_feed",
        royalty_percent=30,
        creator_id="creator_greenhand",
    ),
    CatalogListing(
        id="sop_flower_flush",
        title="Late flower flush and dry-back routine",
        price_label="$6.99",
        price_cents=699,
        provider_product_id="plantpilot.sop.flower_flush",
        royalty_percent=35,
        creator_id="creator_greenhand",
    ),
    CatalogListing(
        id="sop_ipm_weekly",
        title="Weekly IPM scouting checklist",
        price_label="$2.99",
        price_cents=299,
        provider_product_id="plantpilot.sop.ipm_weekly",
        royalty_percent=25,
        creator_id="creator_rootzone",
    ),
    CatalogListing(
        id="sop_clone_dome",
        title="Clone dome humidity ramp-down",
        price_label="Free",
        price_cents=0,
        provider_product_id="plantpilot.sop.clone_dome",
        royalty_percent=0,
        creator_id="creator_rootzone",
    ),
)

_LISTINGS_ADAPTER = TypeAdapter(list[CatalogListing])


class Catalog:
    """Read-only listings fixed at process start."""

    def __init__(self, listings: Iterable[CatalogListing] = DEFAULT_LISTINGS) -> None:
        self._listings = tuple(listings)
        ids = [listing.id for listing in self._listings]
        if len(ids) != len(set(ids)):
            raise ValueError("Catalog listing ids must be unique")

    @property
    def listings(self) -> tuple[CatalogListing, ...]:
        return self._listings

    def find_active(self, product_id: str) -> CatalogListing | None:
        """Match by listing id or by the purchase provider's product id."""
        for listing in self._listings:
            if not listing.active:
                continue
            if product_id in (listing.id, listing.provider_product_id):
                return listing
        return None

    def annotate(self, owned: set[str]) -> list[CatalogView]:
        return [
            CatalogView(listing=listing, owned=listing.id in owned)
            for listing in self._listings
            if listing.active
        ]


def load_catalog(path: str | Path | None) -> Catalog:
    """Defaults when ``path`` is unset; a bad file is a startup error."""
    if path is None:
        return Catalog()
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    listings = _LISTINGS_ADAPTER.validate_python(data)
    logger.info("Loaded %d catalog listings from %s", len(listings), path)
    return Catalog(listings)


__all__ = ["Catalog", "CatalogListing", "CatalogView", "DEFAULT_LISTINGS", "load_catalog"]
