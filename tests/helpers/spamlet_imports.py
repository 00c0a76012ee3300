"""Centralized imports for the spamlet package used in tests."""

from spamlet.core import ports  # type: ignore[import]
from spamlet.core.config import CrawlerOptions, load_options  # type: ignore[import]
from spamlet.core.errors import (  # type: ignore[import]
    CrawlerStateError,
    HookError,
    PortExhaustedError,
    SanitizationError,
)
from spamlet.core.models import LinkVerdict, RequestFrame, ResponseFrame  # type: ignore[import]
from spamlet.core.report import SitemapReport  # type: ignore[import]
from spamlet.crawl.engine import Spamlet  # type: ignore[import]
from spamlet.crawl.sanitizer import canonicalize, sanitize_link  # type: ignore[import]
from spamlet.crawl.state import VisitedSet  # type: ignore[import]
from spamlet.crawl.validator import LinkValidator  # type: ignore[import]

__all__ = [
    "canonicalize",
    "CrawlerOptions",
    "CrawlerStateError",
    "HookError",
    "LinkValidator",
    "LinkVerdict",
    "load_options",
    "PortExhaustedError",
    "ports",
    "RequestFrame",
    "ResponseFrame",
    "SanitizationError",
    "sanitize_link",
    "SitemapReport",
    "Spamlet",
    "VisitedSet",
]
