"""Ownership of the Playwright driver, browser and context for one crawl."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from playwright.sync_api import Browser, BrowserContext, Page, Playwright, Route, sync_playwright

from ..core.config import BROWSER_KINDS, CrawlerOptions
from ..core.errors import PortExhaustedError
from ..core.ports import get_next_open_port

logger = logging.getLogger(__name__)


def _abort_route(route: Route) -> None:
    route.abort()


@dataclass
class BrowserSession:
    """Browser resources shared by every visit of a crawl.

    ``close`` releases the context, the browser and the driver, in that
    order, and is safe to call more than once.
    """

    playwright: Optional[Playwright]
    browser: Browser
    context: BrowserContext
    port: int
    closed: bool = False

    @classmethod
    def launch(cls, browser_kind: str, options: CrawlerOptions) -> "BrowserSession":
        if browser_kind not in BROWSER_KINDS:
            raise ValueError(f"Unknown browser kind: {browser_kind!r}")

        port = get_next_open_port(options.port_start)
        if port is None:
            raise PortExhaustedError(
                f"No free debugging port at or above {options.port_start}"
            )

        args = [f"--remote-debugging-port={port}"] if browser_kind == "chromium" else []
        playwright = sync_playwright().start()
        try:
            browser = getattr(playwright, browser_kind).launch(
                headless=options.headless, args=args
            )
            context = browser.new_context(**options.context_options)
            if options.disable_routes is not None:
                context.route(options.disable_routes, _abort_route)
        except Exception:
            playwright.stop()
            raise

        logger.info("Launched %s (debugging port %s)", browser_kind, port)
        return cls(playwright=playwright, browser=browser, context=context, port=port)

    def new_page(self) -> Page:
        return self.context.new_page()

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        try:
            self.context.close()
            self.browser.close()
        finally:
            if self.playwright is not None:
                self.playwright.stop()
        logger.info("Browser session closed")
