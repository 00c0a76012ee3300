"""Depth-first crawl engine driving a single Playwright page at a time."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Sequence

from playwright.sync_api import BrowserContext, Page, Response
from playwright.sync_api import Error as PlaywrightError

from ..core.config import BROWSER_KINDS, CrawlerOptions
from ..core.errors import CrawlerStateError, SanitizationError
from ..core.models import CrawlFrame, EngineState, LinkVerdict, RequestFrame, ResponseFrame
from .frontier import Frontier
from .hooks import (
    ElementCallback,
    EventCallback,
    HookRegistry,
    LocatorQuery,
    PageCallback,
    ResponseCallback,
)
from .rate_limit import RateLimiter
from .sanitizer import sanitize_link
from .session import BrowserSession
from .state import CrawlerRuntimeState
from .validator import FilterLike, LinkValidator

logger = logging.getLogger(__name__)

SessionFactory = Callable[[str, CrawlerOptions], BrowserSession]

SEED_DEPTH = 1


class Spamlet:
    """Crawls pages reachable from a seed URL and dispatches user hooks.

    Frames are kept on a LIFO frontier, so links discovered by the hooks of
    a page are visited before that page's response hooks run. The browser
    session is opened once per crawl and released on every exit path.
    """

    def __init__(
        self,
        allowed_domains: Sequence[str],
        disallowed_filters: Iterable[FilterLike] = (),
        browser_kind: str = "chromium",
        options: Optional[CrawlerOptions] = None,
        *,
        session_factory: SessionFactory = BrowserSession.launch,
    ) -> None:
        if browser_kind not in BROWSER_KINDS:
            raise ValueError(f"Unknown browser kind: {browser_kind!r}")

        self.browser_kind = browser_kind
        self.options = options or CrawlerOptions()
        self.hooks = HookRegistry(on_error=self.options.hook_errors)
        self.session: Optional[BrowserSession] = None

        self._validator = LinkValidator(allowed_domains, tuple(disallowed_filters))
        self._session_factory = session_factory
        self._engine_state = EngineState.IDLE
        self._state = CrawlerRuntimeState()
        self._frontier = Frontier()
        self._rate_limiter = RateLimiter(None)

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------
    @property
    def state(self) -> EngineState:
        return self._engine_state

    @property
    def runtime_state(self) -> CrawlerRuntimeState:
        """Return the current mutable runtime state for observability tools."""

        return self._state

    @property
    def visited_urls(self) -> frozenset[str]:
        return self._state.visited.snapshot()

    @property
    def context(self) -> BrowserContext:
        if self.session is None:
            raise CrawlerStateError("Browser context is not initialised; call init_context() first")
        return self.session.context

    # ------------------------------------------------------------------
    # Hook registration
    # ------------------------------------------------------------------
    def on_selector(self, selector: str, callback: ElementCallback) -> None:
        self.hooks.on_selector(selector, callback)

    def on_locator(self, query: LocatorQuery, callback: ElementCallback) -> None:
        self.hooks.on_locator(query, callback)

    def on_page_load(self, callback: PageCallback) -> None:
        self.hooks.on_page_load(callback)

    def on_page_response(self, callback: ResponseCallback) -> None:
        self.hooks.on_page_response(callback)

    def add_page_event(self, event: str, callback: EventCallback) -> None:
        self.hooks.add_page_event(event, callback)

    def add_context_event(self, event: str, callback: EventCallback) -> None:
        self.hooks.add_context_event(event, callback)
        if self.session is not None and not self.session.closed:
            self.session.context.on(event, callback)

    # ------------------------------------------------------------------
    # Link policy helpers for hooks
    # ------------------------------------------------------------------
    @staticmethod
    def sanitize_link(href: Optional[str], origin: Optional[str] = None) -> Optional[str]:
        return sanitize_link(href, origin)

    def validate_link(self, link: str, *, page: Optional[Page] = None) -> bool:
        """Returns ``True`` if ``link`` passes the crawl policy.

        When the link is rejected and ``page`` is given, the page is closed.
        """

        verdict = self._validator.validate(link, self._state.visited)
        if verdict.accepted:
            return True

        self._log_rejection(link, verdict)
        if page is not None:
            self._safe_close(page)
        return False

    def visit_link(self, link: Optional[str]) -> None:
        """Queues ``link`` one level below the page currently being handled."""

        if self._engine_state is not EngineState.RUNNING:
            raise CrawlerStateError("visit_link() is only valid while a crawl is running")
        if not link:
            logger.debug("Ignoring empty link")
            return
        self._frontier.push(RequestFrame(url=link, depth=self._state.current_depth + 1))

    # ------------------------------------------------------------------
    # Core workflow
    # ------------------------------------------------------------------
    def init_context(self) -> BrowserSession:
        if self._engine_state is EngineState.CLOSED:
            raise CrawlerStateError("This crawler has already finished a crawl")
        if self.session is not None:
            return self.session

        session = self._session_factory(self.browser_kind, self.options)
        try:
            self.hooks.attach_context_events(session.context)
        except Exception:
            session.close()
            raise
        self.session = session
        return session

    def crawl(self, starter_url: str) -> None:
        if self._engine_state is not EngineState.IDLE:
            raise CrawlerStateError(f"Cannot crawl from state {self._engine_state.value}")

        seed = sanitize_link(starter_url, starter_url)
        if seed is None:
            raise SanitizationError(f"Cannot sanitize seed URL: {starter_url!r}")

        session = self.init_context()
        self._reset_runtime_state()
        self._engine_state = EngineState.RUNNING
        self._frontier.push(RequestFrame(url=seed, depth=SEED_DEPTH))
        logger.info("Crawling from %s", seed)

        try:
            while self._frontier:
                self._execute(session, self._frontier.pop())
        finally:
            self._engine_state = EngineState.DRAINING
            try:
                session.close()
            finally:
                self._engine_state = EngineState.CLOSED

        logger.info(
            "Crawl finished: %s visited, %s failed, %s rejected, %s beyond depth",
            self._state.visited_count,
            self._state.failed_count,
            self._state.rejected_count,
            self._state.dropped_by_depth,
        )

    # ------------------------------------------------------------------
    # Runtime setup helpers
    # ------------------------------------------------------------------
    def _reset_runtime_state(self) -> None:
        self._state = CrawlerRuntimeState()
        self._frontier = Frontier()
        rate_limit = self.options.rate_limit if self.options.rate_limited else None
        self._rate_limiter = RateLimiter(rate_limit)

    # ------------------------------------------------------------------
    # Frame execution
    # ------------------------------------------------------------------
    def _execute(self, session: BrowserSession, frame: CrawlFrame) -> None:
        if isinstance(frame, RequestFrame):
            self._handle_request(session, frame)
        elif isinstance(frame, ResponseFrame):
            self._handle_response(frame)
        else:
            logger.error("Unhandled execution frame type: %r", frame)

    def _handle_request(self, session: BrowserSession, frame: RequestFrame) -> None:
        if self.options.depth_limited and frame.depth > self.options.depth:
            logger.debug("Skipping %s at depth %s", frame.url, frame.depth)
            self._state.dropped_by_depth += 1
            return

        page = session.new_page()
        try:
            self.hooks.attach_page_events(page)
            verdict = self._validator.validate(frame.url, self._state.visited)
            if not verdict.accepted:
                self._state.rejected_count += 1
                self._log_rejection(frame.url, verdict)
                return

            self._rate_limiter.acquire()
            self._visit(page, frame)
        finally:
            self._safe_close(page)

    def _visit(self, page: Page, frame: RequestFrame) -> None:
        url = frame.url
        if not self._state.visited.reserve(url):
            logger.debug("Already reserved: %s", url)
            return

        self._state.current_url = url
        self._state.current_depth = frame.depth

        try:
            response = page.goto(url)
        except PlaywrightError as exc:
            logger.warning("Navigation to %s failed: %s", url, exc)
            response = None

        self._frontier.push(ResponseFrame(response=response, depth=frame.depth))

        if response is None or not response.ok:
            self._state.failed_count += 1
            self._report_failure(url, response)
            return

        self._state.visited_count += 1
        self.hooks.run_page_load(page, url)
        self.hooks.run_selector(page, url)
        self.hooks.run_locator(page, url)

    def _handle_response(self, frame: ResponseFrame) -> None:
        if frame.response is None:
            logger.debug("No response object to dispatch")
            return

        self._state.current_depth = frame.depth
        self._state.current_url = frame.response.url
        self.hooks.run_response(frame.response, frame.response.url)

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------
    @staticmethod
    def _log_rejection(link: str, verdict: LinkVerdict) -> None:
        if verdict is LinkVerdict.ALREADY_VISITED:
            logger.debug("Already visited: %s", link)
        elif verdict is LinkVerdict.DENIED_BY_FILTER:
            logger.info("DISALLOWED URL: %s", link)
        else:
            logger.info("URL NOT ALLOWED: %s", link)

    @staticmethod
    def _report_failure(url: str, response: Optional[Response]) -> None:
        if response is None:
            logger.warning("No response received for %s", url)
            return

        logger.warning("Page %s failed with status code: %s", url, response.status)
        try:
            logger.warning("Headers: %s", response.all_headers())
        except PlaywrightError:
            logger.debug("Could not read headers for %s", url, exc_info=True)

    @staticmethod
    def _safe_close(page: Page) -> None:
        try:
            page.close()
        except PlaywrightError:
            logger.debug("Page close failed", exc_info=True)
