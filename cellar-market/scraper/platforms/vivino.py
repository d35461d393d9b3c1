"""
Vivino search-page source.

Loads ``/search/wines?q=<query>``, reads each ``.wine-card`` into a raw
dict in the browser, and normalizes it with ``extractors.parse_listing``.
Only the first page is read; cards beyond ``MAX_PAGES * CARDS_PER_PAGE``
are ignored.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from config.sources import CARDS_PER_PAGE, FETCH_DELAY_SEC, MAX_PAGES
from extractors import parse_listing, search_url
from models import ScrapeResult, ScrapeStats

from .base import BaseCatalogSource

logger = logging.getLogger(__name__)

_CARD_SELECTOR = ".wine-card"

# Runs inside the page for each card; every value is a (possibly empty) string.
_JS_READ_CARD = """
(el) => {
    const text = (sel) => (el.querySelector(sel)?.textContent || '').trim();
    const attr = (sel, name) => el.querySelector(sel)?.getAttribute(name) || '';
    return {
        name: text('.wine-card__name'),
        price: text('.wine-card__price'),
        rating: text('.average__number'),
        reviews: attr('.average__stars', 'aria-label'),
        image: attr('.wine-card__image img', 'src'),
        region: text('.wine-card__region'),
        vintage: text('.wine-card__vintage'),
        raw_text: (el.textContent || '').trim().slice(0, 2000),
    };
}
"""


class VivinoScraper(BaseCatalogSource):
    name = "vivino"

    def __init__(self, *, delay_sec: float = FETCH_DELAY_SEC, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.delay_sec = delay_sec

    async def fetch(self, query: str) -> ScrapeResult:
        stats = ScrapeStats()
        try:
            await self.goto(search_url(query))
            await asyncio.sleep(self.delay_sec)
            cards = await self.page.locator(_CARD_SELECTOR).all()
        except Exception as exc:
            logger.error("[%s] Search failed for %r: %s", self.name, query, exc)
            return ScrapeResult(success=False, error=str(exc), stats=stats)

        logger.info("[%s] Found %d wine cards for %r", self.name, len(cards), query)
        cards = cards[: MAX_PAGES * CARDS_PER_PAGE]
        stats.attempted = len(cards)

        records = []
        for i, card in enumerate(cards, 1):
            try:
                raw = await card.evaluate(_JS_READ_CARD)
            except Exception as exc:
                logger.warning("[%s] Failed to read card %d: %s", self.name, i, exc)
                stats.failed += 1
                continue

            record = parse_listing(raw)
            if record is None:
                stats.failed += 1
                continue
            records.append(record)
            stats.successful += 1

        return ScrapeResult(success=True, data=records, stats=stats)
