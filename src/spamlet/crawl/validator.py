from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Pattern, Sequence, Union

from ..core.models import LinkVerdict
from .state import VisitedSet

FilterLike = Union[str, Pattern[str]]


def compile_filters(filters: Iterable[FilterLike]) -> tuple[Pattern[str], ...]:
    return tuple(
        item if isinstance(item, re.Pattern) else re.compile(item) for item in filters
    )


@dataclass(slots=True)
class LinkValidator:
    """Allow/deny policy for links about to be visited.

    Checks run in a fixed order: deny filters, the visited set, then the
    allowed domain. Only the first entry of ``allowed_domains`` is inspected,
    as a plain substring of the link.
    """

    allowed_domains: Sequence[str]
    disallowed_filters: tuple[Pattern[str], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.allowed_domains or not self.allowed_domains[0]:
            raise ValueError("allowed_domains must start with a non-empty domain")
        self.allowed_domains = tuple(self.allowed_domains)
        self.disallowed_filters = compile_filters(self.disallowed_filters)

    @property
    def designated_domain(self) -> str:
        return self.allowed_domains[0]

    def is_denied(self, link: str) -> bool:
        return any(pattern.search(link) for pattern in self.disallowed_filters)

    def validate(self, link: str, visited: VisitedSet) -> LinkVerdict:
        if self.is_denied(link):
            return LinkVerdict.DENIED_BY_FILTER
        if link in visited:
            return LinkVerdict.ALREADY_VISITED
        if self.designated_domain not in link:
            return LinkVerdict.DOMAIN_NOT_ALLOWED
        return LinkVerdict.ACCEPTED
