"""Same-origin Playwright crawl engine with lifecycle hooks."""

from .core.config import CrawlerOptions, load_options
from .core.errors import (
    CrawlerStateError,
    HookError,
    PortExhaustedError,
    SanitizationError,
    SpamletError,
)
from .crawl.engine import Spamlet

__all__ = [
    "CrawlerOptions",
    "CrawlerStateError",
    "HookError",
    "PortExhaustedError",
    "SanitizationError",
    "Spamlet",
    "SpamletError",
    "load_options",
]
