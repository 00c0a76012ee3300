from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator


class VisitedSet:
    """URLs a navigation has been issued for. Only ever grows."""

    __slots__ = ("_urls",)

    def __init__(self) -> None:
        self._urls: set[str] = set()

    def reserve(self, url: str) -> bool:
        """Inserts ``url`` if absent; returns ``False`` when it was already there."""

        if url in self._urls:
            return False
        self._urls.add(url)
        return True

    def __contains__(self, url: object) -> bool:
        return url in self._urls

    def __iter__(self) -> Iterator[str]:
        return iter(self._urls)

    def __len__(self) -> int:
        return len(self._urls)

    def snapshot(self) -> frozenset[str]:
        return frozenset(self._urls)


@dataclass(slots=True)
class CrawlerRuntimeState:
    """Mutable bookkeeping for a single crawl."""

    visited: VisitedSet = field(default_factory=VisitedSet)
    visited_count: int = 0
    failed_count: int = 0
    rejected_count: int = 0
    dropped_by_depth: int = 0
    current_depth: int = 0
    current_url: str = ""
