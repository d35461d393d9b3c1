"""
Field extractors for raw and generated catalog text.

Turns loose strings ("$1,250.00", "Château Margaux 2015", "13.5% ABV")
into typed product attributes: prices, years, volumes, category,
varietal, and URL slugs.

All functions are pure (no I/O) and total: malformed input resolves to
``None`` or a documented default, never an exception.  The one exception
to "pure" is ``generate_slug``, which appends a random uniqueness token
unless the caller passes one in.
"""

from __future__ import annotations

import re
import unicodedata
import uuid
from typing import Any, Callable
from urllib.parse import quote_plus

from models import STANDARD_VOLUMES_ML, ProductRecord

# =====================================================================
# 1. Numbers, prices, years
# =====================================================================

_RE_NON_PRICE = re.compile(r"[^\d.]")

# First decimal-shaped token: "4.5", "120", ".75"
_RE_NUMBER = re.compile(r"\d+(?:\.\d+)?|\.\d+")

# Standalone 4-digit year in 1900–2099.
_RE_YEAR = re.compile(r"\b(?:19|20)\d{2}\b")

_RE_WHITESPACE = re.compile(r"\s+")


def parse_price(text: str | None) -> float | None:
    """Strip everything but digits and ``.`` and parse what is left.

    >>> parse_price("$1,250.00")
    1250.0
    >>> parse_price("Price on request")
    """
    if not text:
        return None
    cleaned = _RE_NON_PRICE.sub("", str(text))
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def extract_number(text: str | None) -> float | None:
    """Return the first decimal-number-shaped substring, or ``None``.

    >>> extract_number("4.5 out of 5")
    4.5
    """
    if not text:
        return None
    m = _RE_NUMBER.search(str(text))
    return float(m.group(0)) if m else None


def extract_year(text: str | None) -> int | None:
    """Return the first standalone year between 1900 and 2099.

    >>> extract_year("Opus One 2018")
    2018
    >>> extract_year("NV Brut")
    """
    if not text:
        return None
    m = _RE_YEAR.search(str(text))
    return int(m.group(0)) if m else None


def clean_text(text: str | None) -> str:
    """Collapse runs of whitespace/newlines into single spaces."""
    if not text:
        return ""
    return _RE_WHITESPACE.sub(" ", str(text)).strip()


# =====================================================================
# 2. Alcohol and volume
# =====================================================================

_RE_ABV = re.compile(r"(\d+(?:\.\d+)?)\s*%")

_RE_VOLUME_ML = re.compile(r"(\d+(?:\.\d+)?)\s*ml\b", re.IGNORECASE)
_RE_VOLUME_CL = re.compile(r"(\d+(?:\.\d+)?)\s*cl\b", re.IGNORECASE)
_RE_VOLUME_L = re.compile(r"(\d+(?:\.\d+)?)\s*(?:l|liters?|litres?)\b", re.IGNORECASE)

# Bottle-size words, checked only when no explicit quantity is present.
_VOLUME_KEYWORDS: list[tuple[re.Pattern[str], int]] = [
    (re.compile(r"\bmagnum\b", re.IGNORECASE), 1500),
    (re.compile(r"\bhalf\b", re.IGNORECASE), 375),
    (re.compile(r"\bstandard\b", re.IGNORECASE), 750),
]

DEFAULT_VOLUME_ML = 750


def extract_alcohol_content(text: str | None) -> float | None:
    """Return the ABV percentage in *text*.

    >>> extract_alcohol_content("43% ABV")
    43.0
    """
    if not text:
        return None
    m = _RE_ABV.search(str(text))
    return float(m.group(1)) if m else None


def extract_volume_ml(text: str | None) -> int:
    """Return the bottle volume in ml, defaulting to a standard 750 ml.

    >>> extract_volume_ml("Macallan 12 70cl")
    700
    >>> extract_volume_ml("Krug Grande Cuvée 1.5L")
    1500
    >>> extract_volume_ml("Bollinger Magnum")
    1500
    """
    if not text:
        return DEFAULT_VOLUME_ML
    text = str(text)

    m = _RE_VOLUME_ML.search(text)
    if m:
        return int(round(float(m.group(1))))
    m = _RE_VOLUME_CL.search(text)
    if m:
        return int(round(float(m.group(1)) * 10))
    m = _RE_VOLUME_L.search(text)
    if m:
        return int(round(float(m.group(1)) * 1000))

    for pattern, volume in _VOLUME_KEYWORDS:
        if pattern.search(text):
            return volume
    return DEFAULT_VOLUME_ML


# =====================================================================
# 3. Category and varietal
# =====================================================================

CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "spirits": ["whisky", "whiskey", "vodka", "gin", "rum", "tequila",
                "bourbon", "scotch", "brandy", "cognac"],
    "beer":    ["beer", "ale", "lager", "stout", "porter"],
    "sake":    ["sake", "junmai", "daiginjo"],
}

DEFAULT_CATEGORY = "wine"


def _contains_any(keywords: list[str]) -> Callable[[str], bool]:
    # Plain substring test on lower-cased text: "gins" and "merlots" match.
    return lambda text: any(kw in text for kw in keywords)


# Evaluated in order; the first matching rule wins.
CATEGORY_RULES: list[tuple[Callable[[str], bool], str]] = [
    (_contains_any(CATEGORY_KEYWORDS[cat]), cat)
    for cat in ("spirits", "beer", "sake")
]

KNOWN_VARIETALS: list[str] = [
    "cabernet sauvignon", "merlot", "pinot noir", "chardonnay",
    "sauvignon blanc", "riesling", "pinot grigio", "syrah", "malbec",
    "zinfandel", "sangiovese", "tempranillo", "grenache", "nebbiolo",
    "barbera", "chianti", "bordeaux", "burgundy", "champagne", "prosecco",
    "rosé", "red blend", "white blend",
]

DEFAULT_VARIETAL = "Red Wine"

VARIETAL_RULES: list[tuple[Callable[[str], bool], str]] = [
    (_contains_any([v]), v) for v in KNOWN_VARIETALS
]


def _title_words(text: str) -> str:
    return " ".join(w[:1].upper() + w[1:] for w in text.split(" "))


def determine_category(name: str | None, description: str | None = "") -> str:
    """Classify a product as ``wine``, ``spirits``, ``beer`` or ``sake``.

    Keywords match as case-insensitive substrings.  Spirits keywords are
    checked before beer, beer before sake; anything unmatched is wine.

    >>> determine_category("Scotch Stout")
    'spirits'
    >>> determine_category("Tanqueray Gins Gift Set")
    'spirits'
    >>> determine_category("Unbranded Bottle")
    'wine'
    """
    text = f"{name or ''} {description or ''}".lower()
    for matches, category in CATEGORY_RULES:
        if matches(text):
            return category
    return DEFAULT_CATEGORY


def extract_varietal(name: str | None, description: str | None = "") -> str:
    """Return the first known varietal in *name*/*description*, title-cased.

    >>> extract_varietal("Caymus Cabernet Sauvignon 2020")
    'Cabernet Sauvignon'
    >>> extract_varietal("Merlots of Pomerol")
    'Merlot'
    >>> extract_varietal("House Red")
    'Red Wine'
    """
    text = f"{name or ''} {description or ''}".lower()
    for matches, varietal in VARIETAL_RULES:
        if matches(text):
            return _title_words(varietal)
    return DEFAULT_VARIETAL


# =====================================================================
# 4. Slugs
# =====================================================================

_RE_SLUG_STRIP = re.compile(r"[^a-z0-9\s-]")
_RE_SLUG_SEPARATORS = re.compile(r"[\s-]+")

SLUG_BASE_MAX_LEN = 100


def _fold_accents(text: str) -> str:
    normalized = unicodedata.normalize("NFKD", text)
    return normalized.encode("ascii", "ignore").decode("ascii")


def slug_token() -> str:
    """48-bit random token used to keep repeated slugs distinct."""
    return uuid.uuid4().hex[:12]


def generate_slug(
    name: str,
    producer: str,
    vintage: int | None = None,
    *,
    suffix: str | None = None,
) -> str:
    """Build a URL slug from producer, name and vintage plus a unique token.

    Two calls with identical inputs return different slugs unless the
    caller pins *suffix*.

    >>> generate_slug("Margaux 2015", "Château Margaux", 2015, suffix="x1")
    'chateau-margaux-margaux-2015-2015-x1'
    """
    parts = [producer or "", name or ""]
    if vintage:
        parts.append(str(vintage))

    base = _fold_accents(" ".join(parts)).lower()
    base = _RE_SLUG_STRIP.sub("", base)
    base = _RE_SLUG_SEPARATORS.sub("-", base).strip("-")
    base = base[:SLUG_BASE_MAX_LEN].rstrip("-")

    token = suffix if suffix is not None else slug_token()
    return f"{base}-{token}" if base else token


# =====================================================================
# Unified listing entry-point
# =====================================================================

DEFAULT_LISTING_PRICE = 50.0
DEFAULT_WINE_ABV = 13.5


def search_url(query: str) -> str:
    return f"https://www.vivino.com/search/wines?q={quote_plus(query)}"


def parse_listing(raw: dict[str, Any], source_url: str | None = None) -> ProductRecord | None:
    """Build a ``ProductRecord`` from a raw listing card.

    Expects string values under ``name``, ``price``, ``rating``,
    ``reviews``, ``image``, ``region`` and ``vintage`` (any may be
    missing).  Returns ``None`` when the card has no name.
    """
    name = clean_text(raw.get("name"))
    if not name:
        return None

    region = clean_text(raw.get("region"))
    price = parse_price(raw.get("price"))
    if price is None:
        price = DEFAULT_LISTING_PRICE

    rating = extract_number(raw.get("rating"))
    if rating is not None and not 0.0 <= rating <= 5.0:
        rating = None
    reviews = extract_number(raw.get("reviews"))

    vintage = extract_year(raw.get("vintage")) or extract_year(name)

    volume = extract_volume_ml(name)
    if volume not in STANDARD_VOLUMES_ML:
        volume = DEFAULT_VOLUME_ML

    category = determine_category(name)
    abv = extract_alcohol_content(raw.get("raw_text"))
    if abv is None and category == "wine":
        abv = DEFAULT_WINE_ABV

    return ProductRecord(
        name=name,
        producer=name.split(" ")[0] or "Unknown Producer",
        type=category,
        varietal=extract_varietal(name),
        region=region or "Unknown Region",
        vintage=vintage,
        base_price=price,
        current_price=price,
        volume_ml=volume,
        alcohol_content=abv,
        average_rating=rating,
        total_reviews=int(reviews) if reviews is not None else 0,
        description=f"Wine from {region}" if region else None,
        primary_image_url=raw.get("image") or None,
        source_url=source_url or search_url(name),
    )
