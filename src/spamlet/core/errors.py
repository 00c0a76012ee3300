"""Exception types raised by the crawl engine."""

from __future__ import annotations

from typing import Optional


class SpamletError(Exception):
    """Base class for every error raised by the crawler."""


class SanitizationError(SpamletError):
    """Raised when the seed URL cannot be turned into an absolute URL."""


class PortExhaustedError(SpamletError):
    """Raised when no free debugging port is left for the browser."""


class CrawlerStateError(SpamletError):
    """Raised when the engine is driven from a state that does not allow it."""


class HookError(SpamletError):
    """Wraps an exception raised by a user hook."""

    def __init__(self, kind: str, url: Optional[str], original: BaseException) -> None:
        self.kind = kind
        self.url = url
        self.original = original
        super().__init__(f"{kind} hook failed for {url or '<unknown>'}: {original!r}")
