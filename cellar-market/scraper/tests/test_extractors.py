"""Tests for extractors.py — prices, years, volumes, category, varietal, slugs."""

from __future__ import annotations

import re

import pytest

from extractors import (
    SLUG_BASE_MAX_LEN,
    clean_text,
    determine_category,
    extract_alcohol_content,
    extract_number,
    extract_varietal,
    extract_volume_ml,
    extract_year,
    generate_slug,
    parse_listing,
    parse_price,
    search_url,
)


# =====================================================================
# Numbers, prices, years
# =====================================================================


class TestParsePrice:

    @pytest.mark.parametrize("text, expected", [
        ("$1,250.00", 1250.0),
        ("€ 89.99", 89.99),
        ("45", 45.0),
        ("USD 1 000", 1000.0),
    ])
    def test_parses(self, text, expected):
        assert parse_price(text) == expected

    @pytest.mark.parametrize("amount", ["0", "0.5", "12.34", "1000", "249.99"])
    def test_dollar_prefixed_decimal_round_trips(self, amount):
        assert parse_price(f"${amount}") == float(amount)

    @pytest.mark.parametrize("text", [None, "", "Price on request", "..."])
    def test_unparseable_is_none(self, text):
        assert parse_price(text) is None

    def test_multiple_dots_is_none(self):
        # "1.2.3" survives the strip but is not a float
        assert parse_price("v1.2.3") is None


class TestExtractNumber:

    def test_first_decimal(self):
        assert extract_number("4.5 out of 5") == 4.5

    def test_integer(self):
        assert extract_number("1234 ratings") == 1234.0

    def test_none_when_no_digits(self):
        assert extract_number("no rating yet") is None
        assert extract_number(None) is None


class TestExtractYear:

    def test_vintage_in_name(self):
        assert extract_year("Château Margaux 2015") == 2015

    def test_first_year_wins(self):
        assert extract_year("1998 bottled 2004") == 1998

    def test_out_of_range_ignored(self):
        assert extract_year("Cuvée 1888") is None
        assert extract_year("Lot 21005") is None

    def test_non_vintage(self):
        assert extract_year("NV Brut") is None


class TestCleanText:

    def test_collapses_whitespace(self):
        assert clean_text("  Opus\n\n One \t 2018 ") == "Opus One 2018"

    def test_empty(self):
        assert clean_text(None) == ""
        assert clean_text("   ") == ""


# =====================================================================
# Alcohol and volume
# =====================================================================


class TestAlcoholContent:

    def test_percent(self):
        assert extract_alcohol_content("43% ABV") == 43.0

    def test_decimal_with_space(self):
        assert extract_alcohol_content("Alc. 13.5 % vol") == 13.5

    def test_missing(self):
        assert extract_alcohol_content("Red wine from Napa") is None


class TestVolume:

    @pytest.mark.parametrize("text, expected", [
        ("Caymus 750ml", 750),
        ("Macallan 12 70cl", 700),
        ("Krug Grande Cuvée 1.5L", 1500),
        ("Tito's 1 Liter", 1000),
        ("Bollinger Magnum", 1500),
        ("Sauternes half bottle", 375),
        ("Sassicaia 2019", 750),
        (None, 750),
    ])
    def test_volumes(self, text, expected):
        assert extract_volume_ml(text) == expected

    def test_explicit_quantity_beats_keyword(self):
        assert extract_volume_ml("Magnum 750ml gift set") == 750


# =====================================================================
# Category and varietal
# =====================================================================


class TestDetermineCategory:

    @pytest.mark.parametrize("name, expected", [
        ("Lagavulin 16 Scotch", "spirits"),
        ("Hennessy XO Cognac", "spirits"),
        ("Guinness Stout", "beer"),
        ("Dassai 23 Junmai Sake", "sake"),
        ("Opus One 2018", "wine"),
    ])
    def test_keywords(self, name, expected):
        assert determine_category(name) == expected

    def test_spirits_checked_before_beer(self):
        assert determine_category("Bourbon Barrel Stout") == "spirits"

    def test_case_insensitive(self):
        assert determine_category("HENDRICK'S GIN") == "spirits"

    def test_plural_keyword(self):
        assert determine_category("Tanqueray Gins Gift Set") == "spirits"

    def test_keyword_inside_word(self):
        # substring semantics: "ale" inside "pale"
        assert determine_category("Sierra Nevada Pale") == "beer"

    def test_description_considered(self):
        assert determine_category("Blanton's", "Single barrel bourbon") == "spirits"


class TestExtractVarietal:

    def test_title_cased(self):
        assert extract_varietal("Caymus Cabernet Sauvignon 2020") == "Cabernet Sauvignon"

    def test_first_in_list_order(self):
        # "merlot" precedes "bordeaux" in the known list
        assert extract_varietal("Bordeaux Merlot Blend") == "Merlot"

    def test_plural(self):
        assert extract_varietal("Merlots of Pomerol") == "Merlot"

    def test_case_insensitive(self):
        assert extract_varietal("RIESLING SPÄTLESE") == "Riesling"

    def test_default(self):
        assert extract_varietal("House Red") == "Red Wine"

    def test_accented(self):
        assert extract_varietal("Whispering Angel Rosé") == "Rosé"


# =====================================================================
# Slugs
# =====================================================================


class TestGenerateSlug:

    def test_pinned_suffix(self):
        slug = generate_slug("Margaux 2015", "Château Margaux", 2015, suffix="abc123")
        assert slug == "chateau-margaux-margaux-2015-2015-abc123"

    def test_without_vintage(self):
        assert generate_slug("18 Year", "Macallan", suffix="t") == "macallan-18-year-t"

    def test_shape(self):
        slug = generate_slug("Opus One 2018", "Opus One", 2018)
        assert re.fullmatch(r"[a-z0-9-]+", slug)
        assert slug.startswith("opus-one-opus-one-2018-2018-")
        assert "--" not in slug

    def test_unique_across_calls(self):
        slugs = {generate_slug("Opus One", "Opus One", 2018) for _ in range(200)}
        assert len(slugs) == 200

    def test_punctuation_stripped(self):
        slug = generate_slug("Maker's Mark: Cask Strength!", "Maker's Mark", suffix="x")
        assert slug == "makers-mark-makers-mark-cask-strength-x"

    def test_base_truncated(self):
        slug = generate_slug("a" * 300, "b", suffix="x")
        base, token = slug.rsplit("-", 1)
        assert token == "x"
        assert len(base) <= SLUG_BASE_MAX_LEN

    def test_empty_inputs_fall_back_to_token(self):
        assert generate_slug("", "", suffix="tok") == "tok"
        assert re.fullmatch(r"[0-9a-f]{12}", generate_slug("", ""))


# =====================================================================
# parse_listing
# =====================================================================


class TestParseListing:

    def _raw(self, **overrides):
        raw = {
            "name": "Caymus Cabernet Sauvignon 2020",
            "price": "$89.99",
            "rating": "4.4",
            "reviews": "1234 ratings",
            "image": "https://images.example.com/caymus.png",
            "region": "Napa Valley",
            "vintage": "",
            "raw_text": "",
        }
        raw.update(overrides)
        return raw

    def test_full_card(self):
        r = parse_listing(self._raw())
        assert r.name == "Caymus Cabernet Sauvignon 2020"
        assert r.producer == "Caymus"
        assert r.type == "wine"
        assert r.varietal == "Cabernet Sauvignon"
        assert r.region == "Napa Valley"
        assert r.vintage == 2020
        assert r.base_price == r.current_price == 89.99
        assert r.average_rating == 4.4
        assert r.total_reviews == 1234
        assert r.volume_ml == 750
        assert r.alcohol_content == 13.5
        assert r.description == "Wine from Napa Valley"
        assert r.primary_image_url == "https://images.example.com/caymus.png"
        assert r.source_url == search_url("Caymus Cabernet Sauvignon 2020")
        assert r.validate() == []

    def test_missing_name_is_none(self):
        assert parse_listing(self._raw(name="   ")) is None

    def test_missing_price_defaults(self):
        assert parse_listing(self._raw(price="Sold out")).current_price == 50.0

    def test_out_of_range_rating_dropped(self):
        assert parse_listing(self._raw(rating="92")).average_rating is None

    def test_vintage_field_preferred(self):
        assert parse_listing(self._raw(vintage="2019")).vintage == 2019

    def test_spirit_without_abv(self):
        r = parse_listing(self._raw(name="Macallan 12 Scotch 70cl"))
        assert r.type == "spirits"
        assert r.volume_ml == 700
        assert r.alcohol_content is None

    def test_abv_from_card_text(self):
        r = parse_listing(self._raw(raw_text="Red wine · 14.5% · Napa"))
        assert r.alcohol_content == 14.5

    def test_non_standard_volume_snapped(self):
        assert parse_listing(self._raw(name="Caymus 500ml")).volume_ml == 750

    def test_explicit_source_url(self):
        r = parse_listing(self._raw(), source_url="https://www.vivino.com/w/123")
        assert r.source_url == "https://www.vivino.com/w/123"

    def test_search_url_encodes_query(self):
        assert search_url("barolo wine") == "https://www.vivino.com/search/wines?q=barolo+wine"
