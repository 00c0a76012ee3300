"""Registration and dispatch of user hooks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from playwright.sync_api import BrowserContext, Locator, Page, Response
from playwright.sync_api import Error as PlaywrightError

from ..core.errors import HookError

logger = logging.getLogger(__name__)

PAGE_EVENTS = frozenset(
    {
        "close",
        "console",
        "crash",
        "dialog",
        "domcontentloaded",
        "download",
        "filechooser",
        "frameattached",
        "framedetached",
        "framenavigated",
        "load",
        "pageerror",
        "popup",
        "request",
        "requestfailed",
        "requestfinished",
        "response",
        "websocket",
        "worker",
    }
)

CONTEXT_EVENTS = frozenset(
    {
        "backgroundpage",
        "close",
        "console",
        "dialog",
        "page",
        "request",
        "requestfailed",
        "requestfinished",
        "response",
        "serviceworker",
        "weberror",
    }
)

ElementCallback = Callable[[Locator], Any]
LocatorQuery = Callable[[Page], Locator]
PageCallback = Callable[[Page], Any]
ResponseCallback = Callable[[Response], Any]
EventCallback = Callable[..., Any]


@dataclass(slots=True)
class HookRegistry:
    """Ordered hook lists; dispatch always follows registration order."""

    on_error: str = "raise"
    selector_hooks: List[Tuple[str, ElementCallback]] = field(default_factory=list)
    locator_hooks: List[Tuple[LocatorQuery, ElementCallback]] = field(default_factory=list)
    page_load_hooks: List[PageCallback] = field(default_factory=list)
    response_hooks: List[ResponseCallback] = field(default_factory=list)
    page_events: List[Tuple[str, EventCallback]] = field(default_factory=list)
    context_events: List[Tuple[str, EventCallback]] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def on_selector(self, selector: str, callback: ElementCallback) -> None:
        self.selector_hooks.append((selector, callback))

    def on_locator(self, query: LocatorQuery, callback: ElementCallback) -> None:
        self.locator_hooks.append((query, callback))

    def on_page_load(self, callback: PageCallback) -> None:
        self.page_load_hooks.append(callback)

    def on_page_response(self, callback: ResponseCallback) -> None:
        self.response_hooks.append(callback)

    def add_page_event(self, event: str, callback: EventCallback) -> None:
        if event not in PAGE_EVENTS:
            raise ValueError(f"Unknown page event: {event!r}")
        self.page_events.append((event, callback))

    def add_context_event(self, event: str, callback: EventCallback) -> None:
        if event not in CONTEXT_EVENTS:
            raise ValueError(f"Unknown context event: {event!r}")
        self.context_events.append((event, callback))

    # ------------------------------------------------------------------
    # Raw event pass-through
    # ------------------------------------------------------------------
    def attach_page_events(self, page: Page) -> None:
        for event, callback in self.page_events:
            page.on(event, callback)

    def attach_context_events(self, context: BrowserContext) -> None:
        for event, callback in self.context_events:
            context.on(event, callback)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def run_page_load(self, page: Page, url: str) -> None:
        for callback in self.page_load_hooks:
            self._invoke("page-load", url, callback, page)

    def run_selector(self, page: Page, url: str) -> None:
        for selector, callback in self.selector_hooks:
            for element in self._safe_locator_list(lambda: page.locator(selector), selector):
                self._invoke("selector", url, callback, element)

    def run_locator(self, page: Page, url: str) -> None:
        for query, callback in self.locator_hooks:
            for element in self._safe_locator_list(lambda: query(page), query):
                self._invoke("locator", url, callback, element)

    def run_response(self, response: Response, url: Optional[str]) -> None:
        for callback in self.response_hooks:
            self._invoke("response", url, callback, response)

    def _invoke(self, kind: str, url: Optional[str], callback: Callable[[Any], Any], arg: Any) -> None:
        try:
            callback(arg)
        except Exception as exc:
            if self.on_error != "continue":
                raise HookError(kind, url, exc) from exc
            logger.exception("%s hook failed for %s; continuing", kind, url)

    @staticmethod
    def _safe_locator_list(build: Callable[[], Locator], matcher: Any) -> list[Locator]:
        try:
            return build().all()
        except PlaywrightError:
            logger.warning("Element query %r failed", matcher, exc_info=True)
            return []
