"""
Curated reference tables for the synthetic catalog generator.

Wines:
  - ``WINE_REGIONS``:    region → varietals grown there
  - ``WINE_PRODUCERS``:  region → benchmark producers (not every region
                         has a curated list; the generator falls back to
                         ``GENERIC_WINE_PRODUCERS``)

Spirits:
  - ``SPIRIT_CATEGORIES``: category → regions plus exactly one naming
                           ladder (``ages``, ``types`` or ``grades``)
  - ``SPIRIT_PRODUCERS``:  category → distilleries / houses

Pricing rules are expressed as data too, so the generator stays a thin
loop over these tables.
"""

from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Wine
# ---------------------------------------------------------------------------

WINE_REGIONS: dict[str, list[str]] = {
    "Bordeaux, France": ["Cabernet Sauvignon", "Merlot", "Cabernet Franc", "Petit Verdot"],
    "Burgundy, France": ["Pinot Noir", "Chardonnay"],
    "Champagne, France": ["Champagne", "Blanc de Blancs", "Blanc de Noirs"],
    "Tuscany, Italy": ["Sangiovese", "Chianti", "Brunello di Montalcino"],
    "Piedmont, Italy": ["Nebbiolo", "Barolo", "Barbaresco"],
    "Napa Valley, California": ["Cabernet Sauvignon", "Chardonnay", "Merlot"],
    "Sonoma County, California": ["Pinot Noir", "Zinfandel", "Chardonnay"],
    "Willamette Valley, Oregon": ["Pinot Noir", "Pinot Gris"],
    "Rioja, Spain": ["Tempranillo", "Garnacha"],
    "Douro, Portugal": ["Port", "Touriga Nacional"],
    "Barossa Valley, Australia": ["Shiraz", "Grenache"],
    "Marlborough, New Zealand": ["Sauvignon Blanc", "Pinot Noir"],
    "Mosel, Germany": ["Riesling", "Gewürztraminer"],
}

WINE_PRODUCERS: dict[str, list[str]] = {
    "Bordeaux, France": [
        "Château Margaux", "Château Lafite Rothschild", "Château Latour",
        "Château Haut-Brion", "Château Mouton Rothschild",
        "Château Pichon Baron", "Château Lynch-Bages",
    ],
    "Burgundy, France": [
        "Domaine de la Romanée-Conti", "Domaine Leroy",
        "Domaine Armand Rousseau", "Domaine Georges Roumier",
        "Domaine Coche-Dury",
    ],
    "Champagne, France": ["Dom Pérignon", "Krug", "Louis Roederer", "Bollinger", "Pol Roger"],
    "Tuscany, Italy": ["Antinori", "Ornellaia", "Sassicaia", "Solaia", "Tignanello"],
    "Napa Valley, California": ["Screaming Eagle", "Harlan Estate", "Opus One", "Caymus", "Silver Oak"],
    "Sonoma County, California": ["Williams Selyem", "Rochioli", "Kosta Browne"],
}

GENERIC_WINE_PRODUCERS: list[str] = ["Estate Winery", "Domaine Vineyard", "Château Estate"]

# Base price floor by region substring; first match wins, else default.
WINE_REGION_FLOORS: list[tuple[str, float]] = [
    ("Bordeaux", 200),
    ("Burgundy", 200),
    ("Napa Valley", 150),
]
WINE_DEFAULT_FLOOR = 50

# Producer prestige multipliers; every matching entry applies.
WINE_PRODUCER_MULTIPLIERS: list[tuple[tuple[str, ...], float]] = [
    (("Château Margaux", "Romanée-Conti", "DRC"), 5),
    (("Screaming Eagle", "Harlan"), 3),
]
WINE_AGE_PREMIUM = 5  # currency units per year of age

# ---------------------------------------------------------------------------
# Spirits
# ---------------------------------------------------------------------------

SPIRIT_CATEGORIES: dict[str, dict[str, Any]] = {
    "Scotch Whisky": {
        "regions": ["Speyside", "Highlands", "Islay", "Lowlands", "Campbeltown"],
        "ages": [12, 15, 18, 21, 25, 30],
    },
    "Irish Whiskey": {
        "regions": ["Dublin", "Cork", "Antrim"],
        "ages": [12, 15, 18, 21],
    },
    "American Whiskey": {
        "regions": ["Kentucky", "Tennessee", "Indiana"],
        "types": ["Bourbon", "Rye", "Single Malt"],
    },
    "Cognac": {
        "regions": ["Grande Champagne", "Petite Champagne", "Borderies"],
        "grades": ["VS", "VSOP", "XO", "XXO"],
    },
    "Rum": {
        "regions": ["Jamaica", "Barbados", "Cuba", "Guatemala"],
        "ages": [8, 12, 15, 18, 21],
    },
    "Tequila": {
        "regions": ["Jalisco", "Nayarit", "Guanajuato"],
        "types": ["Blanco", "Reposado", "Añejo", "Extra Añejo"],
    },
}

SPIRIT_PRODUCERS: dict[str, list[str]] = {
    "Scotch Whisky": ["Macallan", "Glenfiddich", "Balvenie", "Ardbeg", "Lagavulin", "Glenlivet", "Highland Park"],
    "Irish Whiskey": ["Redbreast", "Green Spot", "Jameson", "Tullamore Dew"],
    "American Whiskey": ["Pappy Van Winkle", "Buffalo Trace", "Maker's Mark", "Woodford Reserve"],
    "Cognac": ["Hennessy", "Rémy Martin", "Martell", "Courvoisier"],
    "Rum": ["Mount Gay", "Appleton Estate", "Zacapa", "Diplomatico"],
    "Tequila": ["Herradura", "Patrón", "Don Julio", "Casa Noble"],
}

GENERIC_SPIRIT_PRODUCERS: list[str] = ["Artisan Distillery", "Heritage Spirits", "Premium Distillers"]

SPIRIT_CATEGORY_FLOORS: list[tuple[str, float]] = [
    ("Whisky", 100),
    ("Whiskey", 100),
    ("Cognac", 150),
]
SPIRIT_DEFAULT_FLOOR = 60

SPIRIT_BRAND_MULTIPLIERS: list[tuple[tuple[str, ...], float]] = [
    (("Macallan", "Pappy"), 2),
]
SPIRIT_AGE_PREMIUM = 15

SPIRIT_VOLUMES_ML: list[int] = [700, 750, 1000]

# ---------------------------------------------------------------------------
# Shared ranges
# ---------------------------------------------------------------------------

PRICE_JITTER = (0.8, 1.2)
MAX_VINTAGE_AGE = 25

WINE_RATING_RANGE = (3.5, 5.0)
WINE_REVIEW_RANGE = (10, 500)
WINE_ABV_RANGE = (11.5, 15.5)
CRITIC_SCORE_RANGE = (85, 100)

SPIRIT_RATING_RANGE = (3.8, 5.0)
SPIRIT_REVIEW_RANGE = (20, 300)
SPIRIT_ABV_RANGE = (35.0, 50.0)

# ---------------------------------------------------------------------------
# Descriptive copy
# ---------------------------------------------------------------------------

WINE_DESCRIPTION_TEMPLATES: list[str] = [
    "Exceptional {varietal} from {region}, vintage {vintage}. A wine of remarkable character and finesse.",
    "Classic {region} expression of {varietal}. The {vintage} vintage showcases the terroir beautifully.",
    "Premium {varietal} from the prestigious {region} region. {vintage} was an outstanding vintage.",
    "Elegant {varietal} representing the finest traditions of {region}. The {vintage} harvest was exceptional.",
]

# (template, region sentence, fallback sentence when no region)
SPIRIT_DESCRIPTION_TEMPLATES: list[tuple[str, str, str]] = [
    ("Premium {category} crafted with traditional methods.", "From the renowned {region} region.", "Artfully distilled."),
    ("Exceptional {category} showcasing master distillation.", "{region} heritage at its finest.", "Meticulously crafted."),
    ("Distinguished {category} with complex character.", "Representing {region} excellence.", "Premium quality spirit."),
    ("Fine {category} aged to perfection.", "Classic {region} style.", "Expertly balanced."),
]

WINE_TASTING_NOTES: dict[str, str] = {
    "Cabernet Sauvignon": "Rich blackcurrant, cedar, and tobacco with firm tannins and a long finish.",
    "Pinot Noir": "Elegant red cherry, earth, and spice with silky texture and bright acidity.",
    "Chardonnay": "Crisp green apple, citrus, and vanilla with creamy texture and mineral finish.",
    "Champagne": "Fine bubbles with notes of brioche, citrus, and subtle yeast complexity.",
}
DEFAULT_WINE_TASTING_NOTE = "Complex and well-balanced with excellent structure and length."

SPIRIT_TASTING_NOTES: dict[str, str] = {
    "Scotch Whisky": "Complex malt with honey, vanilla, and subtle smoke. Long, warming finish.",
    "Irish Whiskey": "Smooth and approachable with notes of honey, spice, and gentle fruit.",
    "American Whiskey": "Rich caramel, vanilla, and oak with spicy rye and sweet corn notes.",
    "Cognac": "Luxurious blend of dried fruits, spice, and oak with elegant complexity.",
}
DEFAULT_SPIRIT_TASTING_NOTE = "Smooth and complex with rich flavors and a satisfying finish."

WINE_FOOD_PAIRINGS: dict[str, list[str]] = {
    "Cabernet Sauvignon": ["Grilled Red Meat", "Aged Cheese", "Dark Chocolate"],
    "Pinot Noir": ["Duck", "Salmon", "Mushroom Dishes"],
    "Chardonnay": ["Lobster", "Roasted Chicken", "Creamy Pasta"],
    "Champagne": ["Oysters", "Caviar", "Light Appetizers"],
}
DEFAULT_FOOD_PAIRINGS: list[str] = ["Fine Dining", "Gourmet Cheese", "Special Occasions"]
