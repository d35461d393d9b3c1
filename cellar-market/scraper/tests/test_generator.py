"""Tests for generator.py — reproducibility, record invariants, pricing rules."""

from __future__ import annotations

import random
from datetime import datetime, timezone

import pytest

from config.catalog import (
    GENERIC_SPIRIT_PRODUCERS,
    GENERIC_WINE_PRODUCERS,
    SPIRIT_CATEGORIES,
    WINE_PRODUCERS,
    WINE_REGIONS,
)
from generator import CatalogGenerator, _round_price
from models import SYNTHETIC_SOURCE

YEAR = 2024
FIXED_NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


class FixedRandom(random.Random):
    """``random()`` always returns *value*, so the price jitter is pinned."""

    def __init__(self, value: float, seed: int = 0):
        self.value = value
        super().__init__(seed)

    def random(self):
        return self.value


def _generator(rng=None, **kwargs):
    return CatalogGenerator(
        rng=rng or random.Random(42),
        current_year=YEAR,
        clock=lambda: FIXED_NOW,
        **kwargs,
    )


# =====================================================================
# Reproducibility and shape
# =====================================================================


class TestDataset:

    def test_seeded_batches_are_identical(self):
        a = _generator(random.Random(7)).generate_dataset(20, 10)
        b = _generator(random.Random(7)).generate_dataset(20, 10)
        assert a == b

    def test_different_seeds_differ(self):
        a = _generator(random.Random(1)).generate_dataset(20, 0)
        b = _generator(random.Random(2)).generate_dataset(20, 0)
        assert a != b

    def test_wines_then_spirits(self):
        records = _generator().generate_dataset(10, 5)
        assert len(records) == 15
        assert [r.type for r in records] == ["wine"] * 10 + ["spirits"] * 5

    def test_empty(self):
        assert _generator().generate_dataset(0, 0) == []

    def test_negative_count_is_empty(self):
        assert _generator().generate_wines(-3) == []


# =====================================================================
# Record invariants
# =====================================================================


class TestWineInvariants:

    @pytest.fixture(scope="class")
    def wines(self):
        return _generator(random.Random(123)).generate_wines(300)

    def test_all_valid(self, wines):
        for w in wines:
            assert w.validate() == [], w.name

    def test_provenance_and_price(self, wines):
        for w in wines:
            assert w.source_url == SYNTHETIC_SOURCE
            assert w.is_synthetic
            assert w.current_price == w.base_price
            assert w.base_price >= 0
            assert w.base_price == int(w.base_price)

    def test_vintage_window(self, wines):
        for w in wines:
            assert YEAR - 25 <= w.vintage <= YEAR - 1

    def test_ranges(self, wines):
        for w in wines:
            assert w.volume_ml == 750
            assert 3.5 <= w.average_rating <= 5.0
            assert 10 <= w.total_reviews <= 500
            assert 11.5 <= w.alcohol_content <= 15.5
            assert 85 <= w.wine_spectator_score <= 100
            assert 85 <= w.robert_parker_score <= 100

    def test_name_is_producer_varietal_vintage(self, wines):
        for w in wines:
            assert w.name == f"{w.producer} {w.varietal} {w.vintage}"

    def test_varietal_and_producer_belong_to_region(self, wines):
        for w in wines:
            assert w.varietal in WINE_REGIONS[w.region]
            assert w.producer in (WINE_PRODUCERS.get(w.region) or GENERIC_WINE_PRODUCERS)

    def test_copy_fields(self, wines):
        for w in wines:
            assert w.description
            assert w.tasting_notes
            assert w.food_pairings
            assert w.primary_image_url.startswith("/images/wines/")


class TestSpiritInvariants:

    @pytest.fixture(scope="class")
    def spirits(self):
        return _generator(random.Random(321)).generate_spirits(300)

    def test_all_valid(self, spirits):
        for s in spirits:
            assert s.validate() == [], s.name

    def test_ranges(self, spirits):
        for s in spirits:
            assert s.type == "spirits"
            assert s.vintage is None
            assert s.volume_ml in (700, 750, 1000)
            assert 35.0 <= s.alcohol_content <= 50.0
            assert 3.8 <= s.average_rating <= 5.0
            assert 20 <= s.total_reviews <= 300
            assert s.current_price == s.base_price
            assert s.source_url == SYNTHETIC_SOURCE

    def test_region_from_category(self, spirits):
        all_regions = {r for profile in SPIRIT_CATEGORIES.values() for r in profile["regions"]}
        for s in spirits:
            assert s.region in all_regions

    def test_serving_defaults(self, spirits):
        for s in spirits:
            assert s.serving_temperature == "Room temperature"
            assert s.aging_potential == "Ready to drink"


# =====================================================================
# Pricing
# =====================================================================


class TestWinePrice:

    def test_bordeaux_prestige_producer(self):
        gen = _generator(FixedRandom(0.5))
        # 200 floor × 5 prestige + 10 years × 5
        assert gen.wine_price("Bordeaux, France", "Château Margaux", YEAR - 10) == 1050.0

    def test_drc_multiplier(self):
        gen = _generator(FixedRandom(0.5))
        assert gen.wine_price("Burgundy, France", "Domaine de la Romanée-Conti", YEAR - 4) == 1020.0

    def test_napa_cult_producer(self):
        gen = _generator(FixedRandom(0.5))
        assert gen.wine_price("Napa Valley, California", "Screaming Eagle", YEAR - 5) == 475.0

    def test_default_floor(self):
        gen = _generator(FixedRandom(0.5))
        assert gen.wine_price("Rioja, Spain", "Estate Winery", YEAR - 2) == 60.0

    def test_jitter_low_end(self):
        gen = _generator(FixedRandom(0.0))
        assert gen.wine_price("Rioja, Spain", "Estate Winery", YEAR - 2) == 48.0

    def test_jitter_high_end(self):
        gen = _generator(FixedRandom(1.0))
        assert gen.wine_price("Rioja, Spain", "Estate Winery", YEAR - 2) == 72.0


class TestSpiritPrice:

    def test_aged_scotch_named_brand(self):
        gen = _generator(FixedRandom(0.5))
        # (100 + 18 × 15) × 2
        assert gen.spirit_price("Scotch Whisky", "Macallan 18 Year", 18) == 740.0

    def test_irish_whiskey_floor(self):
        gen = _generator(FixedRandom(0.5))
        assert gen.spirit_price("Irish Whiskey", "Redbreast 12 Year", 12) == 280.0

    def test_cognac_no_age(self):
        gen = _generator(FixedRandom(0.5))
        assert gen.spirit_price("Cognac", "Hennessy XO") == 150.0

    def test_pappy_multiplier(self):
        gen = _generator(FixedRandom(0.5))
        assert gen.spirit_price("American Whiskey", "Pappy Van Winkle Bourbon") == 200.0

    def test_default_floor(self):
        gen = _generator(FixedRandom(0.5))
        assert gen.spirit_price("Tequila", "Patrón Blanco") == 60.0


class TestRoundPrice:

    @pytest.mark.parametrize("value, expected", [
        (74.5, 75.0),
        (73.5, 74.0),
        (74.49, 74.0),
        (-3.0, 0.0),
    ])
    def test_half_up(self, value, expected):
        assert _round_price(value) == expected


# =====================================================================
# Naming ladders and fallbacks
# =====================================================================


class TestSpiritNaming:

    def test_age_ladder(self):
        gen = _generator(
            FixedRandom(0.5),
            spirit_categories={"Scotch Whisky": {"regions": ["Speyside"], "ages": [18]}},
            spirit_producers={"Scotch Whisky": ["Macallan"]},
        )
        s = gen.generate_spirit()
        assert s.name == "Macallan 18 Year"
        assert s.varietal == "Scotch Whisky 18 Year"
        assert s.region == "Speyside"
        assert s.base_price == 740.0

    def test_type_ladder(self):
        gen = _generator(
            spirit_categories={"Tequila": {"regions": ["Jalisco"], "types": ["Reposado"]}},
            spirit_producers={"Tequila": ["Herradura"]},
        )
        s = gen.generate_spirit()
        assert s.name == "Herradura Reposado"
        assert s.varietal == "Reposado"

    def test_grade_ladder(self):
        gen = _generator(
            spirit_categories={"Cognac": {"regions": ["Borderies"], "grades": ["XO"]}},
            spirit_producers={"Cognac": ["Martell"]},
        )
        s = gen.generate_spirit()
        assert s.name == "Martell XO"
        assert s.varietal == "Cognac XO"

    def test_no_regions_is_various(self):
        gen = _generator(
            spirit_categories={"Gin": {"regions": [], "types": ["London Dry"]}},
            spirit_producers={"Gin": ["Sipsmith"]},
        )
        s = gen.generate_spirit()
        assert s.region == "Various"
        assert s.description


class TestProducerFallback:

    def test_wine_region_without_producers(self):
        gen = _generator(wine_producers={})
        for w in gen.generate_wines(20):
            assert w.producer in GENERIC_WINE_PRODUCERS

    def test_spirit_category_without_producers(self):
        gen = _generator(spirit_producers={})
        for s in gen.generate_spirits(20):
            assert s.producer in GENERIC_SPIRIT_PRODUCERS


# =====================================================================
# Copy helpers
# =====================================================================


class TestCopyHelpers:

    @pytest.mark.parametrize("varietal, expected", [
        ("Champagne", "6-8°C"),
        ("Sauvignon Blanc", "6-8°C"),
        ("Chardonnay", "8-12°C"),
        ("Pinot Grigio", "8-12°C"),
        ("Nebbiolo", "16-18°C"),
    ])
    def test_serving_temperature(self, varietal, expected):
        assert CatalogGenerator.serving_temperature(varietal) == expected

    @pytest.mark.parametrize("varietal, age, expected", [
        ("Cabernet Sauvignon", 20, "Drinking well now, can age further"),
        ("Cabernet Sauvignon", 5, "10-20 years"),
        ("Pinot Noir", 12, "Drinking well now"),
        ("Pinot Noir", 3, "5-15 years"),
        ("Chardonnay", 9, "Drinking well now"),
        ("Chardonnay", 2, "3-10 years"),
        ("Riesling", 30, "Ready to drink"),
    ])
    def test_aging_potential(self, varietal, age, expected):
        assert _generator().aging_potential(varietal, YEAR - age) == expected

    def test_spirit_tasting_notes_fallback(self):
        assert CatalogGenerator.spirit_tasting_notes("Mezcal Joven")
