"""
Catalog store — thin boundary over the Supabase (PostgREST) client.

The rest of the scraper only needs four capabilities:

  insert(table, row)           → StoreResult   (never raises)
  select(table, ..., limit)    → list of rows  (raises StoreError)
  count(table)                 → int           (raises StoreError)
  delete(table, filters...)    → StoreResult   (never raises)

Inserts and deletes report failure in their return value so batch code
can tally per-row outcomes without try/except; reads raise because a
failed lookup leaves the caller with nothing to work with.

No transactions: every call is one PostgREST round-trip.

Environment variables (read only by ``StoreConfig.from_env``):
    SUPABASE_URL
    SUPABASE_SERVICE_KEY      (SUPABASE_SERVICE_ROLE_KEY also accepted)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Mapping

from supabase import Client, create_client

logger = logging.getLogger("store")

# PostgREST refuses an unfiltered DELETE; "id != nil uuid" matches every row.
NIL_UUID = "00000000-0000-0000-0000-000000000000"


class ConfigurationError(Exception):
    """Store credentials are missing or malformed."""


class StoreError(Exception):
    """A read against the store failed (network, auth, or query error)."""


@dataclass(frozen=True)
class StoreConfig:
    url: str
    key: str

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "StoreConfig":
        """Build and validate a config from environment variables."""
        env = os.environ if environ is None else environ
        config = cls(
            url=(env.get("SUPABASE_URL") or "").strip(),
            key=(
                env.get("SUPABASE_SERVICE_KEY")
                or env.get("SUPABASE_SERVICE_ROLE_KEY")
                or ""
            ).strip(),
        )
        config.validate()
        return config

    def validate(self) -> None:
        missing = []
        if not self.url:
            missing.append("SUPABASE_URL")
        if not self.key:
            missing.append("SUPABASE_SERVICE_KEY")
        if missing:
            raise ConfigurationError(
                f"Missing Supabase credentials: {', '.join(missing)} must be set"
            )
        if not self.url.startswith(("http://", "https://")):
            raise ConfigurationError(f"SUPABASE_URL is not an http(s) URL: {self.url!r}")


@dataclass
class StoreResult:
    """Outcome of a write: ``ok`` plus returned rows or an error message."""

    ok: bool
    data: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None

    @property
    def first(self) -> dict[str, Any] | None:
        return self.data[0] if self.data else None


class CatalogStore:
    """Supabase-backed persistence for products, sellers and price history."""

    def __init__(self, client: Client) -> None:
        self.client = client

    @classmethod
    def from_config(cls, config: StoreConfig) -> "CatalogStore":
        config.validate()
        client = create_client(config.url, config.key)
        logger.info("Supabase client created for %s...", config.url[:40])
        return cls(client)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, table: str, row: dict[str, Any]) -> StoreResult:
        try:
            result = self.client.table(table).insert(row).execute()
        except Exception as exc:
            return StoreResult(ok=False, error=str(exc))
        return StoreResult(ok=True, data=list(result.data or []))

    def delete(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        any_of: list[str] | None = None,
        everything: bool = False,
    ) -> StoreResult:
        """Delete matching rows.

        *filters* are ANDed equality matches; *any_of* is a list of raw
        PostgREST conditions (``"source_url.eq.ai-generated"``) of which
        at least one must hold.  ``everything=True`` is required to wipe
        a table, so a missing filter can never delete all rows by accident.
        """
        if not (filters or any_of or everything):
            raise ValueError("delete() needs filters, any_of, or everything=True")

        try:
            query = self.client.table(table).delete()
            if everything:
                query = query.neq("id", NIL_UUID)
            for column, value in (filters or {}).items():
                query = query.eq(column, value)
            if any_of:
                query = query.or_(",".join(any_of))
            result = query.execute()
        except Exception as exc:
            return StoreResult(ok=False, error=str(exc))
        return StoreResult(ok=True, data=list(result.data or []))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def select(
        self,
        table: str,
        columns: str = "*",
        *,
        filters: Mapping[str, Any] | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        try:
            query = self.client.table(table).select(columns)
            for column, value in (filters or {}).items():
                query = query.eq(column, value)
            if limit is not None:
                query = query.limit(limit)
            result = query.execute()
        except Exception as exc:
            raise StoreError(f"select from {table} failed: {exc}") from exc
        return list(result.data or [])

    def count(self, table: str) -> int:
        try:
            result = (
                self.client.table(table)
                .select("id", count="exact")
                .limit(1)
                .execute()
            )
        except Exception as exc:
            raise StoreError(f"count on {table} failed: {exc}") from exc
        return result.count or 0
