"""
Catalog ingestion — attach records to a seller and insert them one by one.

Flow per batch:
  1. Caller resolves a seller id (``find_or_create_seller`` or
     ``ensure_default_seller``).  Lookup failures propagate: without a
     seller there is nothing to attach products to.
  2. ``ingest`` walks the records in order.  Each one gets a fresh slug
     and uuid and is sent as a single insert.  A record that fails
     validation, raises while its row is prepared, or is rejected by
     the store is logged and counted as failed; the batch keeps going.
     Earlier inserts are never rolled back.
  3. The returned ``IngestionOutcome`` always satisfies
     ``success + failed == len(records)``.

Sellers are deduplicated by ``license_number`` with lookup-before-insert,
not a DB constraint, so concurrent find-or-create calls for the same
license must be serialized by the caller.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Iterable

from extractors import generate_slug
from models import SYNTHETIC_SOURCE, IngestionOutcome, ProductRecord
from store import CatalogStore, StoreError, StoreResult

logger = logging.getLogger("ingestion")

PRODUCTS_TABLE = "products"
SELLERS_TABLE = "sellers"
PRICE_HISTORY_TABLE = "price_history"

DEFAULT_SELLER_NAME = "AI Generated Marketplace"
DEFAULT_SELLER_LICENSE = "AI-GEN-001"
DEFAULT_LICENSE_STATE = "CA"

SAMPLE_COLUMNS = "name, type, current_price, region, producer, vintage"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return str(uuid.uuid4())


class CatalogIngestor:
    """Best-effort sequential writer for catalog records."""

    def __init__(
        self,
        store: CatalogStore,
        *,
        record_price_history: bool = False,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self.store = store
        self.record_price_history = record_price_history
        self._new_id = id_factory

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def ingest(self, records: Iterable[ProductRecord], seller_id: str) -> IngestionOutcome:
        """Insert *records* in order under *seller_id*; never raises per row."""
        outcome = IngestionOutcome()
        for record in records:
            try:
                ok = self._insert_one(record, seller_id)
            except Exception as exc:
                logger.error(
                    "Failed to prepare %s: %s",
                    getattr(record, "name", None) or "<unnamed>", exc, exc_info=True,
                )
                ok = False
            outcome.record(ok)

        logger.info(
            "Ingestion finished: %d inserted, %d failed (%.1f%% success)",
            outcome.success, outcome.failed, outcome.success_rate,
        )
        return outcome

    def _insert_one(self, record: ProductRecord, seller_id: str) -> bool:
        problems = record.validate()
        if problems:
            logger.error("Rejected %r: %s", record.name or "<unnamed>", "; ".join(problems))
            return False

        record.slug = generate_slug(record.name, record.producer, record.vintage)
        record.seller_id = seller_id
        product_id = self._new_id()

        row = record.to_row(
            product_id=product_id,
            seller_id=seller_id,
            slug=record.slug,
            now_iso=_now_iso(),
        )
        result = self.store.insert(PRODUCTS_TABLE, row)
        if not result.ok:
            logger.error("Failed to insert %s: %s", record.name, result.error)
            return False

        logger.debug("Inserted: %s", record.name)
        if self.record_price_history:
            self.record_price_snapshot(product_id, record.current_price)
        return True

    def record_price_snapshot(self, product_id: str, price: float, volume: int = 0) -> bool:
        """Append one OHLC snapshot to ``price_history``.

        Best-effort: a failure is logged and reported as ``False`` but
        never affects the product insert that triggered it.
        """
        row = {
            "id": self._new_id(),
            "product_id": product_id,
            "price": price,
            "volume": volume,
            "high": price,
            "low": price,
            "open": price,
            "close": price,
            "timestamp": _now_iso(),
            "source": "scraper",
        }
        result = self.store.insert(PRICE_HISTORY_TABLE, row)
        if not result.ok:
            logger.warning("Failed to insert price history for %s: %s", product_id, result.error)
        return result.ok

    # ------------------------------------------------------------------
    # Sellers
    # ------------------------------------------------------------------

    def find_or_create_seller(self, business_name: str, license_number: str) -> str:
        """Return the id of the seller holding *license_number*, creating it if absent."""
        existing = self._find_seller(license_number)
        if existing:
            return existing
        return self._create_seller(
            {
                "business_name": business_name,
                "license_number": license_number,
                "verification_status": "unverified",
            }
        )

    def ensure_default_seller(self) -> str:
        """Find or create the pre-verified seller that owns synthetic rows."""
        existing = self._find_seller(DEFAULT_SELLER_LICENSE)
        if existing:
            return existing
        return self._create_seller(
            {
                "business_name": DEFAULT_SELLER_NAME,
                "license_number": DEFAULT_SELLER_LICENSE,
                "verification_status": "verified",
                "seller_rating": 4.8,
                "total_sales": 1000,
                "years_in_business": 5,
            }
        )

    def _find_seller(self, license_number: str) -> str | None:
        rows = self.store.select(
            SELLERS_TABLE,
            "id",
            filters={"license_number": license_number},
            limit=1,
        )
        return rows[0]["id"] if rows else None

    def _create_seller(self, fields: dict[str, Any]) -> str:
        seller_id = self._new_id()
        now_iso = _now_iso()
        row = {
            "id": seller_id,
            "user_id": None,
            "license_state": DEFAULT_LICENSE_STATE,
            **fields,
            "created_at": now_iso,
            "updated_at": now_iso,
        }
        result = self.store.insert(SELLERS_TABLE, row)
        if not result.ok:
            raise StoreError(f"Failed to create seller: {result.error}")

        logger.info("Created seller: %s (%s)", fields["business_name"], fields["license_number"])
        return seller_id

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def count_products(self) -> int:
        return self.store.count(PRODUCTS_TABLE)

    def sample_products(self, limit: int = 10) -> list[dict[str, Any]]:
        return self.store.select(PRODUCTS_TABLE, SAMPLE_COLUMNS, limit=limit)

    def clear_all_products(self) -> StoreResult:
        result = self.store.delete(PRODUCTS_TABLE, everything=True)
        if not result.ok:
            logger.error("Error clearing products: %s", result.error)
        return result

    def clear_synthetic_products(self) -> StoreResult:
        """Delete rows tagged ``ai-generated`` by source_url or description."""
        result = self.store.delete(
            PRODUCTS_TABLE,
            any_of=[
                f"source_url.eq.{SYNTHETIC_SOURCE}",
                f"description.ilike.*{SYNTHETIC_SOURCE}*",
            ],
        )
        if not result.ok:
            logger.error("Error clearing synthetic products: %s", result.error)
        return result
