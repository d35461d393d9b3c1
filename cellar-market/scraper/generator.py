"""
Synthetic catalog generator — plausible wines and spirits from curated tables.

Every value is drawn from the reference tables in ``config/catalog.py``
through a single injectable ``random.Random``; pass a seeded instance to
get a reproducible catalog (tests do this).

Wine pricing:
  region floor (Bordeaux/Burgundy 200, Napa 150, else 50)
  × producer prestige (Margaux/DRC ×5, Screaming Eagle/Harlan ×3)
  + age × 5
  × uniform(0.8, 1.2), rounded to whole currency units

Spirit pricing:
  category floor (whisky 100, cognac 150, else 60)
  + age × 15
  × named brand (Macallan/Pappy ×2)
  × uniform(0.8, 1.2), rounded

Every emitted record has ``source_url == "ai-generated"`` and
``current_price == base_price``.

Usage:
    from generator import CatalogGenerator
    records = CatalogGenerator(rng=random.Random(7)).generate_dataset(10, 5)
"""

from __future__ import annotations

import logging
import math
import random
import re
from datetime import datetime, timezone
from typing import Any, Callable, Sequence

from config.catalog import (
    CRITIC_SCORE_RANGE,
    DEFAULT_FOOD_PAIRINGS,
    DEFAULT_SPIRIT_TASTING_NOTE,
    DEFAULT_WINE_TASTING_NOTE,
    GENERIC_SPIRIT_PRODUCERS,
    GENERIC_WINE_PRODUCERS,
    MAX_VINTAGE_AGE,
    PRICE_JITTER,
    SPIRIT_ABV_RANGE,
    SPIRIT_AGE_PREMIUM,
    SPIRIT_BRAND_MULTIPLIERS,
    SPIRIT_CATEGORIES,
    SPIRIT_CATEGORY_FLOORS,
    SPIRIT_DEFAULT_FLOOR,
    SPIRIT_DESCRIPTION_TEMPLATES,
    SPIRIT_PRODUCERS,
    SPIRIT_RATING_RANGE,
    SPIRIT_REVIEW_RANGE,
    SPIRIT_TASTING_NOTES,
    SPIRIT_VOLUMES_ML,
    WINE_ABV_RANGE,
    WINE_AGE_PREMIUM,
    WINE_DEFAULT_FLOOR,
    WINE_DESCRIPTION_TEMPLATES,
    WINE_FOOD_PAIRINGS,
    WINE_PRODUCER_MULTIPLIERS,
    WINE_PRODUCERS,
    WINE_RATING_RANGE,
    WINE_REGION_FLOORS,
    WINE_REGIONS,
    WINE_REVIEW_RANGE,
    WINE_TASTING_NOTES,
)
from models import SYNTHETIC_SOURCE, ProductRecord

logger = logging.getLogger("generator")

_RE_IMAGE_SLUG = re.compile(r"[^a-z0-9]")


def _round_price(value: float) -> float:
    """Round half-up to a whole currency unit, never below zero."""
    return float(max(0, math.floor(value + 0.5)))


def _floor_for(label: str, floors: list[tuple[str, float]], default: float) -> float:
    for needle, floor in floors:
        if needle in label:
            return floor
    return default


def _apply_multipliers(
    price: float,
    label: str,
    multipliers: list[tuple[tuple[str, ...], float]],
) -> float:
    for needles, factor in multipliers:
        if any(n in label for n in needles):
            price *= factor
    return price


def _image_url(kind: str, producer: str, varietal: str) -> str:
    slug = (
        f"{_RE_IMAGE_SLUG.sub('-', producer.lower())}"
        f"-{_RE_IMAGE_SLUG.sub('-', varietal.lower())}"
    )
    folder = "wines" if kind == "wine" else kind
    return f"/images/{folder}/{slug}.jpg"


class CatalogGenerator:
    """Builds randomized-but-constrained wine and spirit records."""

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        current_year: int | None = None,
        clock: Callable[[], datetime] | None = None,
        wine_regions: dict[str, list[str]] | None = None,
        wine_producers: dict[str, list[str]] | None = None,
        spirit_categories: dict[str, dict[str, Any]] | None = None,
        spirit_producers: dict[str, list[str]] | None = None,
    ) -> None:
        self.rng = rng or random.Random()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self.current_year = current_year or self._clock().year

        self.wine_regions = wine_regions if wine_regions is not None else WINE_REGIONS
        self.wine_producers = wine_producers if wine_producers is not None else WINE_PRODUCERS
        self.spirit_categories = (
            spirit_categories if spirit_categories is not None else SPIRIT_CATEGORIES
        )
        self.spirit_producers = (
            spirit_producers if spirit_producers is not None else SPIRIT_PRODUCERS
        )

    # ------------------------------------------------------------------
    # Random helpers
    # ------------------------------------------------------------------

    def _pick(self, items: Sequence[Any]) -> Any:
        return self.rng.choice(list(items))

    def _rand_int(self, bounds: tuple[int, int]) -> int:
        return self.rng.randint(bounds[0], bounds[1])

    def _rand_float(self, bounds: tuple[float, float]) -> float:
        return round(self.rng.uniform(bounds[0], bounds[1]), 1)

    def _jitter(self) -> float:
        lo, hi = PRICE_JITTER
        return lo + self.rng.random() * (hi - lo)

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    def wine_price(self, region: str, producer: str, vintage: int) -> float:
        age = self.current_year - vintage
        price = _floor_for(region, WINE_REGION_FLOORS, WINE_DEFAULT_FLOOR)
        price = _apply_multipliers(price, producer, WINE_PRODUCER_MULTIPLIERS)
        price += age * WINE_AGE_PREMIUM
        return _round_price(price * self._jitter())

    def spirit_price(self, category: str, name: str, age: int | None = None) -> float:
        price = _floor_for(category, SPIRIT_CATEGORY_FLOORS, SPIRIT_DEFAULT_FLOOR)
        if age:
            price += age * SPIRIT_AGE_PREMIUM
        price = _apply_multipliers(price, name, SPIRIT_BRAND_MULTIPLIERS)
        return _round_price(price * self._jitter())

    # ------------------------------------------------------------------
    # Wines
    # ------------------------------------------------------------------

    def generate_wine(self) -> ProductRecord:
        region = self._pick(self.wine_regions)
        varietal = self._pick(self.wine_regions[region])
        producer = self._pick(self.wine_producers.get(region) or GENERIC_WINE_PRODUCERS)
        vintage = self.current_year - self._rand_int((1, MAX_VINTAGE_AGE))

        price = self.wine_price(region, producer, vintage)
        description = self._pick(WINE_DESCRIPTION_TEMPLATES).format(
            varietal=varietal, region=region, vintage=vintage,
        )

        return ProductRecord(
            name=f"{producer} {varietal} {vintage}",
            producer=producer,
            type="wine",
            varietal=varietal,
            region=region,
            vintage=vintage,
            alcohol_content=self._rand_float(WINE_ABV_RANGE),
            volume_ml=750,
            base_price=price,
            current_price=price,
            average_rating=self._rand_float(WINE_RATING_RANGE),
            total_reviews=self._rand_int(WINE_REVIEW_RANGE),
            wine_spectator_score=self._rand_int(CRITIC_SCORE_RANGE),
            robert_parker_score=self._rand_int(CRITIC_SCORE_RANGE),
            description=description,
            primary_image_url=_image_url("wine", producer, varietal),
            tasting_notes=WINE_TASTING_NOTES.get(varietal, DEFAULT_WINE_TASTING_NOTE),
            food_pairings=list(WINE_FOOD_PAIRINGS.get(varietal, DEFAULT_FOOD_PAIRINGS)),
            serving_temperature=self.serving_temperature(varietal),
            aging_potential=self.aging_potential(varietal, vintage),
            source_url=SYNTHETIC_SOURCE,
            scraped_at=self._clock(),
        )

    def generate_wines(self, count: int) -> list[ProductRecord]:
        return [self.generate_wine() for _ in range(max(0, count))]

    @staticmethod
    def serving_temperature(varietal: str) -> str:
        if "Champagne" in varietal or varietal == "Sauvignon Blanc":
            return "6-8°C"
        if varietal in ("Chardonnay", "Pinot Grigio"):
            return "8-12°C"
        return "16-18°C"

    def aging_potential(self, varietal: str, vintage: int) -> str:
        age = self.current_year - vintage
        if "Cabernet" in varietal or "Bordeaux" in varietal:
            return "Drinking well now, can age further" if age > 15 else "10-20 years"
        if varietal == "Pinot Noir":
            return "Drinking well now" if age > 10 else "5-15 years"
        if varietal == "Chardonnay":
            return "Drinking well now" if age > 8 else "3-10 years"
        return "Ready to drink"

    # ------------------------------------------------------------------
    # Spirits
    # ------------------------------------------------------------------

    def generate_spirit(self) -> ProductRecord:
        category = self._pick(self.spirit_categories)
        profile = self.spirit_categories[category]
        producer = self._pick(self.spirit_producers.get(category) or GENERIC_SPIRIT_PRODUCERS)

        name = producer
        varietal = category
        region = self._pick(profile["regions"]) if profile.get("regions") else ""
        age: int | None = None

        # Exactly one naming ladder applies: ages, then types, then grades.
        if profile.get("ages"):
            age = self._pick(profile["ages"])
            name += f" {age} Year"
            varietal += f" {age} Year"
        elif profile.get("types"):
            style = self._pick(profile["types"])
            name += f" {style}"
            varietal = style
        elif profile.get("grades"):
            grade = self._pick(profile["grades"])
            name += f" {grade}"
            varietal = f"{category} {grade}"

        price = self.spirit_price(category, name, age)

        return ProductRecord(
            name=name,
            producer=producer,
            type="spirits",
            varietal=varietal,
            region=region or "Various",
            alcohol_content=self._rand_float(SPIRIT_ABV_RANGE),
            volume_ml=self._pick(SPIRIT_VOLUMES_ML),
            base_price=price,
            current_price=price,
            average_rating=self._rand_float(SPIRIT_RATING_RANGE),
            total_reviews=self._rand_int(SPIRIT_REVIEW_RANGE),
            description=self.spirit_description(category, region),
            primary_image_url=_image_url("spirits", producer, category),
            tasting_notes=self.spirit_tasting_notes(varietal),
            serving_temperature="Room temperature",
            aging_potential="Ready to drink",
            source_url=SYNTHETIC_SOURCE,
            scraped_at=self._clock(),
        )

    def generate_spirits(self, count: int) -> list[ProductRecord]:
        return [self.generate_spirit() for _ in range(max(0, count))]

    def spirit_description(self, category: str, region: str) -> str:
        lead, with_region, without_region = self._pick(SPIRIT_DESCRIPTION_TEMPLATES)
        tail = with_region.format(region=region) if region else without_region
        return f"{lead.format(category=category)} {tail}"

    @staticmethod
    def spirit_tasting_notes(varietal: str) -> str:
        for category, note in SPIRIT_TASTING_NOTES.items():
            if category in varietal:
                return note
        return DEFAULT_SPIRIT_TASTING_NOTE

    # ------------------------------------------------------------------
    # Mixed dataset
    # ------------------------------------------------------------------

    def generate_dataset(self, wine_count: int = 500, spirits_count: int = 300) -> list[ProductRecord]:
        """Return *wine_count* wines followed by *spirits_count* spirits."""
        logger.info("Generating %d wines and %d spirits...", wine_count, spirits_count)
        records = self.generate_wines(wine_count) + self.generate_spirits(spirits_count)
        logger.info("Generated %d total products", len(records))
        return records
