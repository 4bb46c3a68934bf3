"""Entitlement grants and creator royalty postings.

``verify_purchase`` is keyed on the purchase provider's transaction id so a
redelivered purchase event never grants twice or posts a second royalty.

Entitlements and royalties live in separate stores that flush
independently. A crash between the two flushes can leave an entitlement on
disk without its royalty entry (or the reverse); the entitlement is the
authoritative record when reconciling.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from core.errors import NotFound, ValidationFailure, ValidationIssue
from persistence.contracts import RecordStore
from persistence.models import EntitlementRecord, RoyaltyLedgerEntry
from services.catalog import Catalog, CatalogListing

logger = logging.getLogger(__name__)


def compute_royalty(net_revenue: int, royalty_percent: float) -> int:
    """Royalty in minor units, rounding halves away from zero."""
    amount = Decimal(net_revenue) * Decimal(str(royalty_percent)) / Decimal(100)
    return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class PurchaseOutcome:
    entitlement: EntitlementRecord
    listing: CatalogListing
    already_owned: bool
    royalty: RoyaltyLedgerEntry | None = None


class Ledger:
    def __init__(
        self,
        catalog: Catalog,
        entitlements: RecordStore[EntitlementRecord],
        royalties: RecordStore[RoyaltyLedgerEntry],
    ) -> None:
        self._catalog = catalog
        self._entitlements = entitlements
        self._royalties = royalties
        self._lock = threading.Lock()

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def verify_purchase(
        self,
        user_id: str,
        product_id: str,
        transaction_id: str,
        net_revenue: int = 0,
        *,
        source: str = "store",
    ) -> PurchaseOutcome:
        _check_purchase_args(user_id, product_id, transaction_id, net_revenue)
        listing = self._catalog.find_active(product_id)
        if listing is None:
            raise NotFound("product", product_id)

        with self._lock:
            existing = self._entitlements.find(
                lambda record: record.user_id == user_id
                and record.product_id == listing.id
                and record.transaction_id == transaction_id
            )
            if existing is not None:
                logger.info(
                    "Purchase already verified user=%s product=%s transaction=%s",
                    user_id,
                    listing.id,
                    transaction_id,
                )
                return PurchaseOutcome(entitlement=existing, listing=listing, already_owned=True)

            entitlement = self._entitlements.append(
                {
                    "user_id": user_id,
                    "product_id": listing.id,
                    "transaction_id": transaction_id,
                    "source": source,
                }
            )
            royalty = None
            if net_revenue > 0:
                royalty = self._royalties.append(
                    {
                        "product_id": listing.id,
                        "creator_id": listing.creator_id,
                        "transaction_id": transaction_id,
                        "net_revenue": net_revenue,
                        "royalty_percent": listing.royalty_percent,
                        "royalty_amount": compute_royalty(net_revenue, listing.royalty_percent),
                    }
                )

        logger.info(
            "Purchase verified user=%s product=%s transaction=%s royalty=%s",
            user_id,
            listing.id,
            transaction_id,
            royalty.royalty_amount if royalty else 0,
        )
        return PurchaseOutcome(
            entitlement=entitlement, listing=listing, already_owned=False, royalty=royalty
        )

    def list_owned(self, user_id: str) -> set[str]:
        return {
            record.product_id
            for record in self._entitlements.filter(lambda record: record.user_id == user_id)
        }

    def list_entitlements(self, user_id: str, limit: object = None) -> list[EntitlementRecord]:
        return self._entitlements.list_for_owner(user_id, limit)

    def list_royalties(
        self, creator_id: str | None = None, limit: object = None
    ) -> list[RoyaltyLedgerEntry]:
        if creator_id:
            return self._royalties.list_for_owner(creator_id, limit)
        return self._royalties.list(limit)

    def creator_total(self, creator_id: str) -> int:
        return sum(
            entry.royalty_amount
            for entry in self._royalties.filter(lambda entry: entry.creator_id == creator_id)
        )


def _check_purchase_args(
    user_id: str, product_id: str, transaction_id: str, net_revenue: int
) -> None:
    issues: list[ValidationIssue] = []
    if not user_id:
        issues.append(ValidationIssue("userId", "User id is required"))
    if not product_id:
        issues.append(ValidationIssue("productId", "Product id is required"))
    if not transaction_id:
        issues.append(ValidationIssue("transactionId", "Transaction id is required"))
    if isinstance(net_revenue, bool) or not isinstance(net_revenue, int) or net_revenue < 0:
        issues.append(
            ValidationIssue("netRevenue", "Net revenue must be a non-negative integer")
        )
    if issues:
        raise ValidationFailure("Invalid purchase", issues)


__all__ = ["Ledger", "PurchaseOutcome", "compute_royalty"]
