"""Shared data structures used across the crawl engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


@dataclass(frozen=True, slots=True)
class RequestFrame:
    """A pending navigation to ``url`` discovered at ``depth``."""

    url: str
    depth: int


@dataclass(frozen=True, slots=True)
class ResponseFrame:
    """A navigation result waiting for the response hooks.

    ``depth`` is the depth of the visit that produced the response.
    """

    response: Optional[Any]
    depth: int


CrawlFrame = Union[RequestFrame, ResponseFrame]


class LinkVerdict(Enum):
    ACCEPTED = "accepted"
    DENIED_BY_FILTER = "denied by filter"
    ALREADY_VISITED = "already visited"
    DOMAIN_NOT_ALLOWED = "domain not allowed"

    @property
    def accepted(self) -> bool:
        return self is LinkVerdict.ACCEPTED


class EngineState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    CLOSED = "closed"
