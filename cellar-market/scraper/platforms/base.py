"""
Abstract base class for browser-backed catalog sources.

Each source owns one Chromium instance for the lifetime of its async
context, plus the viewport/User-Agent setup and a ``goto`` helper that
applies the configured wait strategy and timeout.  Subclasses implement
``fetch(query)`` and return a ``ScrapeResult``.

This is a thin fetch layer: no pagination crawling, no retry/backoff,
no bot-detection evasion.  A page that does not render the expected
markup simply yields zero records.
"""

from __future__ import annotations

import abc
import logging

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from config.sources import BROWSER_ARGS, GOTO_TIMEOUT_MS, VIEWPORT, WAIT_UNTIL, get_user_agent
from models import ScrapeResult

logger = logging.getLogger(__name__)


class BaseCatalogSource(abc.ABC):
    """Skeleton shared by every browser-backed source.

    Usage::

        async with VivinoScraper() as source:
            result = await source.fetch("barolo wine")
    """

    name: str = "base"

    def __init__(self, *, headless: bool = True) -> None:
        self.headless = headless

        # Set by __aenter__
        self._pw: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    # ------------------------------------------------------------------
    # Async context manager: browser lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> "BaseCatalogSource":
        self._pw = await async_playwright().start()
        self._browser = await self._pw.chromium.launch(headless=self.headless, args=BROWSER_ARGS)
        logger.info("[%s] Browser launched (headless=%s)", self.name, self.headless)

        self._context = await self._browser.new_context(
            viewport=VIEWPORT,
            user_agent=get_user_agent(),
            locale="en-US",
        )
        self._page = await self._context.new_page()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        for obj in (self._page, self._context, self._browser):
            if obj:
                try:
                    await obj.close()
                except Exception as exc:
                    logger.debug("[%s] Close failed: %s", self.name, exc)
        if self._pw:
            await self._pw.stop()
        logger.info("[%s] Cleanup done", self.name)

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    @property
    def page(self) -> Page:
        assert self._page is not None, "catalog sources must be used as an async context manager"
        return self._page

    async def goto(self, url: str) -> None:
        logger.info("[%s] Navigating to %s (wait_until=%s)", self.name, url, WAIT_UNTIL)
        await self.page.goto(url, wait_until=WAIT_UNTIL, timeout=GOTO_TIMEOUT_MS)

    # ------------------------------------------------------------------
    # Abstract interface
    # ------------------------------------------------------------------

    @abc.abstractmethod
    async def fetch(self, query: str) -> ScrapeResult:
        """Search the source for *query* and return normalized records."""
        ...
