"""Crawler options and environment loading."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Pattern, Union

from dotenv import load_dotenv

BROWSER_KINDS = frozenset({"chromium", "firefox", "webkit"})
HOOK_ERROR_POLICIES = frozenset({"raise", "continue"})
DEFAULT_PORT_START = 2222

RouteMatcher = Union[str, Pattern[str], Callable[[str], bool]]


@dataclass(slots=True)
class CrawlerOptions:
    """Holds runtime options for a single crawl.

    ``rate_limit`` is the minimum average spacing between navigations in
    seconds; ``None`` or any non-positive value disables limiting. ``depth``
    of ``0`` means unlimited.
    """

    headless: bool = True
    rate_limit: Optional[float] = None
    depth: int = 0
    disable_routes: Optional[RouteMatcher] = None
    context_options: dict[str, Any] = field(default_factory=dict)
    hook_errors: str = "raise"
    port_start: int = DEFAULT_PORT_START

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError(f"depth must be >= 0, got {self.depth}")
        if self.hook_errors not in HOOK_ERROR_POLICIES:
            raise ValueError(
                f"hook_errors must be one of {sorted(HOOK_ERROR_POLICIES)}, got {self.hook_errors!r}"
            )

    @property
    def rate_limited(self) -> bool:
        return (
            self.rate_limit is not None
            and not math.isnan(self.rate_limit)
            and self.rate_limit > 0
        )

    @property
    def depth_limited(self) -> bool:
        return self.depth > 0


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def load_options(**overrides: Any) -> tuple[str, CrawlerOptions]:
    """Builds ``(browser_kind, CrawlerOptions)`` from environment variables.

    Explicit keyword overrides win over values read from the environment
    (and from a ``.env`` file when present). ``browser_kind`` may be passed
    as an override as well.
    """

    load_dotenv()

    browser_kind = overrides.pop("browser_kind", None) or os.getenv("SPAMLET_BROWSER", "chromium")
    if browser_kind not in BROWSER_KINDS:
        raise ValueError(f"Unknown browser kind: {browser_kind!r}")

    raw_rate = os.getenv("SPAMLET_RATE_LIMIT")
    values: dict[str, Any] = {
        "headless": _env_flag("SPAMLET_HEADLESS", "true"),
        "rate_limit": float(raw_rate) if raw_rate else None,
        "depth": int(os.getenv("SPAMLET_DEPTH", "0")),
        "hook_errors": os.getenv("SPAMLET_HOOK_ERRORS", "raise"),
        "port_start": int(os.getenv("SPAMLET_PORT_START", str(DEFAULT_PORT_START))),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})

    return browser_kind, CrawlerOptions(**values)
