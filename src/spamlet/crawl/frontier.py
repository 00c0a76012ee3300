from __future__ import annotations

from typing import List

from ..core.models import CrawlFrame


class Frontier:
    """LIFO stack of pending crawl frames.

    The most recently pushed frame is executed next, which gives a
    depth-first traversal.
    """

    __slots__ = ("_frames",)

    def __init__(self) -> None:
        self._frames: List[CrawlFrame] = []

    def push(self, frame: CrawlFrame) -> None:
        self._frames.append(frame)

    def pop(self) -> CrawlFrame:
        return self._frames.pop()

    def __len__(self) -> int:
        return len(self._frames)

    def __bool__(self) -> bool:
        return bool(self._frames)
