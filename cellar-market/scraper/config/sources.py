"""
Fetch defaults for the catalog sources.

Browser launch flags, the User-Agent pool, navigation timeouts, the
courtesy delay between successive queries, and the default query list
used by ``python main.py scrape``.
"""

import random as _random

# ---------------------------------------------------------------------------
# Browser / Playwright defaults
# ---------------------------------------------------------------------------

BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--disable-gpu",
]

_USER_AGENT_POOL = [
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.1 Safari/605.1.15",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:120.0) Gecko/20100101 Firefox/120.0",
]


def get_user_agent() -> str:
    """Return a randomly selected desktop User-Agent."""
    return _random.choice(_USER_AGENT_POOL)


VIEWPORT = {"width": 1440, "height": 900}

# "networkidle" lets the search grid finish its XHR render.
WAIT_UNTIL = "networkidle"

GOTO_TIMEOUT_MS = 60_000

# Max cards read per query (pages × cards-per-page on the search grid).
MAX_PAGES = 5
CARDS_PER_PAGE = 20

# Courtesy pause after each page load and between queries.
FETCH_DELAY_SEC = 2.0
QUERY_DELAY_SEC = 1.0

# ---------------------------------------------------------------------------
# Scrape manager defaults
# ---------------------------------------------------------------------------

SOURCES = ("sample", "vivino")
DEFAULT_SOURCES = ["sample"]

DEFAULT_QUERIES = [
    "bordeaux wine",
    "burgundy wine",
    "napa valley cabernet",
    "champagne",
    "barolo wine",
    "rioja wine",
    "single malt whisky",
    "bourbon whiskey",
]

DEFAULT_MAX_RESULTS = 50

# Seller that owns rows created by ``scrape``.
SCRAPER_SELLER_NAME = "Wine Scraper Bot"
SCRAPER_SELLER_LICENSE = "SCRAPER-001"
