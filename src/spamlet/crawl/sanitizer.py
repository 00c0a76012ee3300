"""Normalisation of discovered hrefs into absolute, comparable URLs."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import SplitResult, quote, urlsplit, urlunsplit

logger = logging.getLogger(__name__)

DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443, "ftp": 21}
ORIGIN_RELATIVE_PREFIXES = ("/", "#", "?")

_PATH_SAFE = "/%:@!$&'()*+,;=~-._"
_QUERY_SAFE = _PATH_SAFE + "?"
_CURRENT_SEGMENTS = frozenset({".", "%2e"})
_PARENT_SEGMENTS = frozenset({"..", ".%2e", "%2e.", "%2e%2e"})


def _canonical_netloc(parts: SplitResult, scheme: str) -> str:
    userinfo, _, _ = parts.netloc.rpartition("@")
    host = (parts.hostname or "").lower()
    if ":" in host:
        host = f"[{host}]"

    port = parts.port
    netloc = f"{userinfo}@{host}" if userinfo else host
    if port is not None and DEFAULT_PORTS.get(scheme) != port:
        netloc = f"{netloc}:{port}"
    return netloc


def _remove_dot_segments(path: str) -> str:
    """Resolves ``.`` and ``..`` segments of an absolute path (RFC 3986 5.2.4)."""

    segments = path.split("/")
    resolved: list[str] = []
    for segment in segments[1:]:
        lowered = segment.lower()
        if lowered in _PARENT_SEGMENTS:
            if resolved:
                resolved.pop()
        elif lowered not in _CURRENT_SEGMENTS:
            resolved.append(segment)

    if segments[-1].lower() in _PARENT_SEGMENTS | _CURRENT_SEGMENTS:
        resolved.append("")
    return "/" + "/".join(resolved)


def canonicalize(url: str) -> str:
    """Returns the canonical absolute form of ``url``.

    Raises ``ValueError`` when the authority carries an invalid port.
    """

    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    netloc = _canonical_netloc(parts, scheme) if parts.netloc else ""

    path = quote(parts.path, safe=_PATH_SAFE)
    if path.startswith("/") and scheme in DEFAULT_PORTS:
        path = _remove_dot_segments(path)
    if not path and scheme in DEFAULT_PORTS:
        path = "/"

    return urlunsplit(
        (
            scheme,
            netloc,
            path,
            quote(parts.query, safe=_QUERY_SAFE),
            quote(parts.fragment, safe=_QUERY_SAFE),
        )
    )


def origin_of(url: str) -> Optional[str]:
    """``scheme://authority`` of ``url``, or ``None`` if it has neither."""

    parts = urlsplit(url.strip())
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}"


def is_absolute(href: str) -> bool:
    try:
        return bool(urlsplit(href.strip()).scheme)
    except ValueError:
        return False


def sanitize_link(href: Optional[str], origin: Optional[str] = None) -> Optional[str]:
    """Turns ``href`` into an absolute URL, or ``None`` if the form is unsupported.

    Absolute hrefs are canonicalised on their own. Hrefs starting with ``/``,
    ``#`` or ``?`` are resolved against the origin of ``origin`` (its path is
    discarded). Any other relative form is reported and dropped.
    """

    if not href or not href.strip():
        logger.error("Unhandled href type: %r", href)
        return None

    href = href.strip()
    try:
        if is_absolute(href):
            return canonicalize(href)

        base = origin_of(origin) if origin else None
        if base and href.startswith(ORIGIN_RELATIVE_PREFIXES):
            return canonicalize(base + href)
    except ValueError:
        logger.error("Malformed href: %r", href)
        return None

    logger.error("Unhandled href type: %r", href)
    return None
