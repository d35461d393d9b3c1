"""
Cellar Market catalog orchestrator.

Generates or fetches wine/spirit records, resolves the owning seller,
and inserts the records into the Supabase ``products`` table.  Also
exposes the small maintenance commands operators run by hand.

Usage:
    python main.py                               # scrape default queries (sample source)
    python main.py check                         # connectivity check
    python main.py count                         # total product rows
    python main.py sample -n 5                   # list 5 sample rows
    python main.py generate --wines 500 --spirits 300
    python main.py generate --seed 7 --dry-run   # generate + log only, no DB
    python main.py clear --synthetic             # delete ai-generated rows
    python main.py clear                         # delete ALL products
    python main.py scrape --source vivino --query "barolo wine" --max-results 20

Environment variables:
    SUPABASE_URL, SUPABASE_SERVICE_KEY   # required for every DB command
    DRY_RUN=true                         # same as --dry-run for generate/scrape
    SCRAPE_DELAY_SEC=1.0                 # courtesy pause between queries
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import random
import sys
import time
from typing import Any, Sequence

from dotenv import load_dotenv

from config.sources import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_QUERIES,
    DEFAULT_SOURCES,
    QUERY_DELAY_SEC,
    SCRAPER_SELLER_LICENSE,
    SCRAPER_SELLER_NAME,
    SOURCES,
)
from generator import CatalogGenerator
from ingestion import PRODUCTS_TABLE, CatalogIngestor
from models import IngestionOutcome, ProductRecord, ScrapeStats
from platforms import VivinoScraper
from sample_catalog import SampleCatalogSource
from store import CatalogStore, ConfigurationError, StoreConfig, StoreError

logger = logging.getLogger("orchestrator")

SOURCE_MAP = {
    "sample": SampleCatalogSource,
    "vivino": VivinoScraper,
}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").lower() == "true"


# ---------------------------------------------------------------------------
# Reporting helpers
# ---------------------------------------------------------------------------


def log_stats(stats: ScrapeStats) -> None:
    logger.info("=== Scraping Statistics ===")
    logger.info("  Attempted:    %d", stats.attempted)
    logger.info("  Successful:   %d", stats.successful)
    logger.info("  Failed:       %d", stats.failed)
    logger.info("  Success Rate: %.1f%%", stats.success_rate)


def log_outcome(outcome: IngestionOutcome, label: str = "Database") -> None:
    logger.info("%s: %d inserted, %d failed", label, outcome.success, outcome.failed)


def _log_record_preview(records: Sequence[ProductRecord], limit: int = 5) -> None:
    for i, r in enumerate(records[:limit], 1):
        logger.info(
            "  %d. %s — %s (%s) — $%.2f",
            i, r.name, r.producer, r.vintage or "NV", r.current_price,
        )


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def check_connection(store: CatalogStore) -> tuple[bool, str | None]:
    """Read one row from ``products`` to prove credentials and schema work."""
    try:
        store.select(PRODUCTS_TABLE, "id", limit=1)
    except StoreError as exc:
        return False, str(exc)
    return True, None


def generate_and_ingest(
    store: CatalogStore | None,
    *,
    wines: int,
    spirits: int,
    seed: int | None = None,
    dry_run: bool = False,
) -> IngestionOutcome:
    """Generate a synthetic batch and insert it under the default seller."""
    rng = random.Random(seed) if seed is not None else None
    records = CatalogGenerator(rng=rng).generate_dataset(wines, spirits)

    if dry_run or store is None:
        logger.info("[DRY RUN] Would insert %d synthetic products", len(records))
        _log_record_preview(records)
        return IngestionOutcome()

    ingestor = CatalogIngestor(store)
    seller_id = ingestor.ensure_default_seller()
    logger.info("Seller ID: %s", seller_id)

    outcome = ingestor.ingest(records, seller_id)
    log_outcome(outcome)
    return outcome


async def scrape_all(
    store: CatalogStore | None,
    *,
    sources: Sequence[str] | None = None,
    queries: Sequence[str] | None = None,
    max_results: int = DEFAULT_MAX_RESULTS,
    insert_to_db: bool = True,
    query_delay_sec: float = QUERY_DELAY_SEC,
) -> dict[str, Any]:
    """Fetch every query from every source, inserting as results arrive.

    Stops once *max_results* records have been collected.  A failed
    query is counted and skipped, as is a source that cannot start; a
    failed seller lookup aborts the run before anything is fetched.
    """
    sources = list(sources or DEFAULT_SOURCES)
    queries = list(queries or DEFAULT_QUERIES)
    insert_to_db = insert_to_db and store is not None

    logger.info("=" * 60)
    logger.info("Cellar Market Scraper Starting")
    logger.info("  SOURCES:     %s", ", ".join(sources))
    logger.info("  QUERIES:     %s", ", ".join(queries))
    logger.info("  MAX RESULTS: %d", max_results)
    logger.info("  INSERT:      %s", insert_to_db)
    logger.info("=" * 60)

    ingestor: CatalogIngestor | None = None
    seller_id: str | None = None
    if insert_to_db:
        ingestor = CatalogIngestor(store)
        seller_id = ingestor.find_or_create_seller(SCRAPER_SELLER_NAME, SCRAPER_SELLER_LICENSE)
        logger.info("Seller ID: %s", seller_id)

    collected: list[ProductRecord] = []
    stats = ScrapeStats()
    outcome = IngestionOutcome()

    for source_name in sources:
        source_cls = SOURCE_MAP.get(source_name)
        if source_cls is None:
            logger.warning("Unknown source '%s' — skipping", source_name)
            continue

        logger.info("Scraping from %s...", source_name.upper())
        try:
            async with source_cls() as source:
                for query in queries:
                    logger.info("Query: %r", query)
                    try:
                        result = await source.fetch(query)
                    except Exception as exc:
                        logger.error("[%s] Error scraping %r: %s", source_name, query, exc, exc_info=True)
                        stats.failed += 1
                        continue

                    stats.add(result.stats)
                    if not result.success:
                        logger.error("[%s] Failed to scrape %r: %s", source_name, query, result.error)
                        continue

                    collected.extend(result.data)
                    logger.info("[%s] %d records from %r", source_name, len(result.data), query)

                    if ingestor is not None and seller_id and result.data:
                        batch = ingestor.ingest(result.data, seller_id)
                        log_outcome(batch)
                        outcome = outcome.merge(batch)

                    if len(collected) >= max_results:
                        logger.info("Reached maximum results limit (%d)", max_results)
                        break

                    await asyncio.sleep(query_delay_sec)
        except Exception as exc:
            # Browser launch or page setup failed; skip the whole source.
            logger.error("[%s] Source failed: %s", source_name, exc, exc_info=True)
            stats.failed += 1
            continue

        if len(collected) >= max_results:
            break

    logger.info("=" * 60)
    logger.info("SCRAPING COMPLETE")
    logger.info("=" * 60)
    log_stats(stats)
    logger.info("Total records collected: %d", len(collected))
    if insert_to_db:
        log_outcome(outcome, label="Total")
    else:
        logger.info("Sample records scraped:")
        _log_record_preview(collected)

    return {"records": collected, "stats": stats, "outcome": outcome}


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Populate the Cellar Market product catalog")
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("check", help="Verify Supabase connectivity")
    sub.add_parser("count", help="Report total product rows")

    p_sample = sub.add_parser("sample", help="List sample product rows")
    p_sample.add_argument("-n", "--limit", type=int, default=10)

    p_gen = sub.add_parser("generate", help="Generate and ingest a synthetic batch")
    p_gen.add_argument("--wines", type=int, default=500)
    p_gen.add_argument("--spirits", type=int, default=300)
    p_gen.add_argument("--seed", type=int, default=None, help="Seed for a reproducible batch")
    p_gen.add_argument("--dry-run", action="store_true", help="Generate only, skip DB writes")

    p_clear = sub.add_parser("clear", help="Delete product rows")
    p_clear.add_argument(
        "--synthetic", action="store_true",
        help="Only delete ai-generated rows (default: delete everything)",
    )

    p_scrape = sub.add_parser("scrape", help="Fetch listings and ingest them")
    p_scrape.add_argument("--source", action="append", choices=SOURCES, dest="sources")
    p_scrape.add_argument("--query", action="append", dest="queries")
    p_scrape.add_argument("--max-results", type=int, default=DEFAULT_MAX_RESULTS)
    p_scrape.add_argument("--dry-run", action="store_true", help="Fetch only, skip DB writes")

    return parser


def _needs_store(args: argparse.Namespace) -> bool:
    return not getattr(args, "dry_run", False)


def run_command(args: argparse.Namespace, store: CatalogStore | None) -> int:
    """Dispatch a parsed command against *store*; returns an exit code."""
    command = args.command or "scrape"

    if command == "check":
        ok, error = check_connection(store)
        if ok:
            logger.info("Connection OK — products table is readable")
            return 0
        logger.error("Connection failed: %s", error)
        return 1

    ingestor = CatalogIngestor(store) if store is not None else None

    if command == "count":
        logger.info("Total products: %d", ingestor.count_products())
        return 0

    if command == "sample":
        rows = ingestor.sample_products(args.limit)
        logger.info("Showing %d sample products:", len(rows))
        for i, row in enumerate(rows, 1):
            logger.info(
                "  %d. %s — %s (%s) — %s — $%s",
                i, row.get("name"), row.get("producer"), row.get("vintage") or "NV",
                row.get("region"), row.get("current_price"),
            )
        return 0

    if command == "generate":
        start = time.time()
        outcome = generate_and_ingest(
            store,
            wines=args.wines,
            spirits=args.spirits,
            seed=args.seed,
            dry_run=args.dry_run,
        )
        logger.info("Generate finished in %.1fs", time.time() - start)
        return 1 if outcome.failed and not outcome.success else 0

    if command == "clear":
        if args.synthetic:
            result = ingestor.clear_synthetic_products()
            scope = "synthetic"
        else:
            result = ingestor.clear_all_products()
            scope = "all"
        if not result.ok:
            return 1
        logger.info("Deleted %d products (%s)", len(result.data), scope)
        return 0

    if command == "scrape":
        asyncio.run(
            scrape_all(
                store,
                sources=getattr(args, "sources", None),
                queries=getattr(args, "queries", None),
                max_results=getattr(args, "max_results", DEFAULT_MAX_RESULTS),
                insert_to_db=not getattr(args, "dry_run", False),
                query_delay_sec=float(os.getenv("SCRAPE_DELAY_SEC", str(QUERY_DELAY_SEC))),
            )
        )
        return 0

    logger.error("Unknown command: %s", command)
    return 2


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    args = build_parser().parse_args(argv)
    if _env_flag("DRY_RUN") and args.command in (None, "generate", "scrape"):
        args.dry_run = True

    store: CatalogStore | None = None
    if _needs_store(args):
        try:
            store = CatalogStore.from_config(StoreConfig.from_env())
        except ConfigurationError as exc:
            logger.error("%s", exc)
            return 1

    try:
        return run_command(args, store)
    except StoreError as exc:
        logger.error("Store error: %s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
