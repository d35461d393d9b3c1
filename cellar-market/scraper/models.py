"""
Catalog record types shared by the generator, extractors, and ingestion.

A ``ProductRecord`` is the normalized in-memory form of one bottle.  It is
built once (by the synthetic generator, the sample source, or
``extractors.parse_listing``), receives a slug and seller at ingestion
time, and is then handed to the store for a single insert.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

# Provenance sentinels written to ``products.source_url``.
SYNTHETIC_SOURCE = "ai-generated"
SAMPLE_SOURCE = "sample-data"

PRODUCT_TYPES: tuple[str, ...] = ("wine", "spirits", "beer", "sake")

# Standard bottle sizes (half, 70cl, standard, litre, magnum).
STANDARD_VOLUMES_ML: tuple[int, ...] = (375, 700, 750, 1000, 1500)

CRITIC_SCORE_FIELDS: tuple[str, ...] = (
    "wine_spectator_score",
    "robert_parker_score",
    "james_suckling_score",
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class ProductRecord:
    """One catalog item (wine or spirit) with optional enrichment fields."""

    name: str
    producer: str
    type: str
    varietal: str
    region: str
    base_price: float
    current_price: float
    volume_ml: int = 750

    vintage: int | None = None
    appellation: str | None = None
    alcohol_content: float | None = None

    # Critic scores are independent of each other.
    average_rating: float | None = None
    total_reviews: int = 0
    wine_spectator_score: int | None = None
    robert_parker_score: int | None = None
    james_suckling_score: int | None = None

    description: str | None = None
    tasting_notes: str | None = None
    food_pairings: list[str] = field(default_factory=list)
    serving_temperature: str | None = None
    aging_potential: str | None = None

    primary_image_url: str | None = None
    image_urls: list[str] = field(default_factory=list)

    source_url: str = SYNTHETIC_SOURCE
    scraped_at: datetime = field(default_factory=_utcnow)

    # Assigned by the ingestion pipeline.
    slug: str | None = None
    seller_id: str | None = None

    @property
    def is_synthetic(self) -> bool:
        return self.source_url == SYNTHETIC_SOURCE

    def validate(self) -> list[str]:
        """Return a list of invariant violations (empty when valid).

        Never raises: wrongly-typed fields are reported as problems.
        """
        problems: list[str] = []
        for text_field in ("name", "producer"):
            value = getattr(self, text_field)
            if not isinstance(value, str) or not value.strip():
                problems.append(f"{text_field} is empty")
        if self.type not in PRODUCT_TYPES:
            problems.append(f"unknown type {self.type!r}")
        for price_field in ("base_price", "current_price"):
            price = getattr(self, price_field)
            if not _is_number(price):
                problems.append(f"{price_field} is not a number: {price!r}")
            elif price < 0:
                problems.append(f"{price_field} is negative: {price}")
        if self.volume_ml not in STANDARD_VOLUMES_ML:
            problems.append(f"non-standard volume_ml: {self.volume_ml!r}")
        if self.average_rating is not None and not (
            _is_number(self.average_rating) and 0.0 <= self.average_rating <= 5.0
        ):
            problems.append(f"average_rating out of range: {self.average_rating!r}")
        reviews = 0 if self.total_reviews is None else self.total_reviews
        if not _is_number(reviews) or reviews < 0:
            problems.append(f"total_reviews is invalid: {self.total_reviews!r}")
        for score_field in CRITIC_SCORE_FIELDS:
            score = getattr(self, score_field)
            if score is not None and not (_is_number(score) and 0 <= score <= 100):
                problems.append(f"{score_field} out of range: {score!r}")
        if not isinstance(self.scraped_at, datetime):
            problems.append(f"scraped_at is not a datetime: {self.scraped_at!r}")
        return problems

    def to_row(
        self,
        *,
        product_id: str,
        seller_id: str,
        slug: str,
        now_iso: str | None = None,
    ) -> dict[str, Any]:
        """Build the ``products`` row for a single insert."""
        now_iso = now_iso or _utcnow().isoformat()
        return {
            "id": product_id,
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "varietal": self.varietal,
            "region": self.region,
            "appellation": self.appellation,
            "vintage": self.vintage,
            "producer": self.producer,
            "alcohol_content": self.alcohol_content,
            "volume_ml": self.volume_ml,
            "base_price": self.base_price,
            "current_price": self.current_price,
            "average_rating": self.average_rating,
            "total_reviews": self.total_reviews or 0,
            "wine_spectator_score": self.wine_spectator_score,
            "robert_parker_score": self.robert_parker_score,
            "james_suckling_score": self.james_suckling_score,
            "primary_image_url": self.primary_image_url,
            "image_urls": list(self.image_urls or []),
            "tasting_notes": self.tasting_notes,
            "food_pairings": list(self.food_pairings or []),
            "serving_temperature": self.serving_temperature,
            "aging_potential": self.aging_potential,
            "source_url": self.source_url,
            "scraped_at": self.scraped_at.isoformat(),
            "seller_id": seller_id,
            "available_quantity": 1,
            "slug": slug,
            "created_at": now_iso,
            "updated_at": now_iso,
        }


@dataclass
class IngestionOutcome:
    """Running ``{success, failed}`` tally for one ingestion batch."""

    success: int = 0
    failed: int = 0

    def record(self, ok: bool) -> "IngestionOutcome":
        if ok:
            self.success += 1
        else:
            self.failed += 1
        return self

    def merge(self, other: "IngestionOutcome") -> "IngestionOutcome":
        return IngestionOutcome(
            success=self.success + other.success,
            failed=self.failed + other.failed,
        )

    @property
    def total(self) -> int:
        return self.success + self.failed

    @property
    def success_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return round(self.success / self.total * 100, 1)

    def to_dict(self) -> dict[str, int]:
        return {"success": self.success, "failed": self.failed}


@dataclass
class ScrapeStats:
    """Per-source fetch statistics (attempted / successful / failed)."""

    attempted: int = 0
    successful: int = 0
    failed: int = 0

    def add(self, other: "ScrapeStats") -> None:
        self.attempted += other.attempted
        self.successful += other.successful
        self.failed += other.failed

    @property
    def success_rate(self) -> float:
        if self.attempted == 0:
            return 0.0
        return round(self.successful / self.attempted * 100, 1)


@dataclass
class ScrapeResult:
    """What a catalog source returns for one query."""

    success: bool
    data: list[ProductRecord] = field(default_factory=list)
    error: str | None = None
    stats: ScrapeStats = field(default_factory=ScrapeStats)
