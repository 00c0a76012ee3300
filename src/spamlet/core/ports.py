"""Free TCP port discovery for the browser debugging endpoint."""

from __future__ import annotations

import logging
import socket
from typing import Optional

logger = logging.getLogger(__name__)

MAX_PORT = 65535


def is_port_open(port: int) -> bool:
    """Returns ``True`` if ``port`` can be bound and released right away."""

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        try:
            probe.bind(("", port))
        except OSError:
            return False
    return True


def get_next_open_port(start_from: int = 2222) -> Optional[int]:
    """Scans upwards from ``start_from`` and returns the first free port."""

    port = start_from
    while port <= MAX_PORT:
        if is_port_open(port):
            return port
        port += 1

    logger.error("No open port found between %s and %s", start_from, MAX_PORT)
    return None
