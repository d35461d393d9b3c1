"""
Curated sample source — five reference bottles, no network.

Used by ``python main.py scrape`` (the default source) and in test mode
to exercise the ingestion path end-to-end without hitting a live site.
Rows are tagged ``source_url = "sample-data"`` so they are distinguishable
from both synthetic and fetched listings.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from models import SAMPLE_SOURCE, ProductRecord, ScrapeResult, ScrapeStats

logger = logging.getLogger("sample")


def sample_records(now: datetime | None = None) -> list[ProductRecord]:
    """Return fresh copies of the curated sample catalog."""
    now = now or datetime.now(timezone.utc)
    return [
        ProductRecord(
            name="Château Margaux 2015",
            description="Premier Grand Cru Classé from Bordeaux, Margaux appellation",
            type="wine",
            varietal="Cabernet Sauvignon Blend",
            region="Bordeaux, France",
            appellation="Margaux",
            vintage=2015,
            producer="Château Margaux",
            alcohol_content=13.5,
            volume_ml=750,
            base_price=850.0,
            current_price=850.0,
            average_rating=4.8,
            total_reviews=245,
            wine_spectator_score=98,
            robert_parker_score=96,
            primary_image_url="https://example.com/margaux-2015.jpg",
            tasting_notes=(
                "Complex nose of dark fruits, violets, and cedar. "
                "Full-bodied with silky tannins and a long, elegant finish."
            ),
            food_pairings=["Beef", "Lamb", "Aged Cheese"],
            serving_temperature="16-18°C",
            aging_potential="30+ years",
            source_url=SAMPLE_SOURCE,
            scraped_at=now,
        ),
        ProductRecord(
            name="Dom Pérignon 2013",
            description="Prestigious Champagne from Épernay",
            type="wine",
            varietal="Champagne",
            region="Champagne, France",
            vintage=2013,
            producer="Dom Pérignon",
            alcohol_content=12.5,
            volume_ml=750,
            base_price=250.0,
            current_price=250.0,
            average_rating=4.6,
            total_reviews=189,
            wine_spectator_score=95,
            primary_image_url="https://example.com/dom-perignon-2013.jpg",
            tasting_notes="Fresh and vibrant with notes of citrus, brioche, and mineral complexity.",
            food_pairings=["Seafood", "Caviar", "Light Appetizers"],
            serving_temperature="6-8°C",
            source_url=SAMPLE_SOURCE,
            scraped_at=now,
        ),
        ProductRecord(
            name="Caymus Cabernet Sauvignon 2020",
            description="Napa Valley Cabernet Sauvignon",
            type="wine",
            varietal="Cabernet Sauvignon",
            region="Napa Valley, California",
            vintage=2020,
            producer="Caymus Vineyards",
            alcohol_content=14.5,
            volume_ml=750,
            base_price=85.0,
            current_price=85.0,
            average_rating=4.3,
            total_reviews=324,
            wine_spectator_score=90,
            primary_image_url="https://example.com/caymus-2020.jpg",
            tasting_notes="Rich and concentrated with dark berry flavors, vanilla, and soft tannins.",
            food_pairings=["Grilled Beef", "BBQ", "Dark Chocolate"],
            serving_temperature="16-18°C",
            aging_potential="10-15 years",
            source_url=SAMPLE_SOURCE,
            scraped_at=now,
        ),
        ProductRecord(
            name="Macallan 18 Year Single Malt",
            description="Premium Speyside Single Malt Scotch Whisky",
            type="spirits",
            varietal="Single Malt Scotch",
            region="Speyside, Scotland",
            producer="The Macallan",
            alcohol_content=43.0,
            volume_ml=700,
            base_price=450.0,
            current_price=450.0,
            average_rating=4.7,
            total_reviews=156,
            primary_image_url="https://example.com/macallan-18.jpg",
            tasting_notes="Rich sherry influence with notes of dried fruits, chocolate, and spice.",
            serving_temperature="Room temperature",
            aging_potential="Ready to drink",
            source_url=SAMPLE_SOURCE,
            scraped_at=now,
        ),
        ProductRecord(
            name="Opus One 2018",
            description="Napa Valley Bordeaux-style blend",
            type="wine",
            varietal="Cabernet Sauvignon Blend",
            region="Napa Valley, California",
            vintage=2018,
            producer="Opus One",
            alcohol_content=14.5,
            volume_ml=750,
            base_price=400.0,
            current_price=400.0,
            average_rating=4.5,
            total_reviews=98,
            wine_spectator_score=94,
            robert_parker_score=96,
            primary_image_url="https://example.com/opus-one-2018.jpg",
            tasting_notes="Elegant and powerful with layers of dark fruit, cedar, and graphite.",
            food_pairings=["Prime Rib", "Lamb", "Strong Cheese"],
            serving_temperature="16-18°C",
            aging_potential="20+ years",
            source_url=SAMPLE_SOURCE,
            scraped_at=now,
        ),
    ]


class SampleCatalogSource:
    """Catalog source that always returns the curated sample bottles."""

    name = "sample"

    async def __aenter__(self) -> "SampleCatalogSource":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        return None

    async def fetch(self, query: str) -> ScrapeResult:
        records = sample_records()
        logger.info("Generated %d sample records for %r", len(records), query)
        return ScrapeResult(
            success=True,
            data=records,
            stats=ScrapeStats(
                attempted=len(records),
                successful=len(records),
                failed=0,
            ),
        )
