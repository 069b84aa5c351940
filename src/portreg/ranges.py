"""Blocked-port range matching for portreg.

A range spec is text of the form ``"N"`` (single port) or ``"N-M"``
(inclusive range). Malformed specs never raise: they simply match nothing.
"""

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .registry import BlockedPort

_INT_RE = re.compile(r"[+-]?[0-9]+")


def _parse_int(text: str) -> int | None:
    """Parse a trimmed integer, or return None if it is not one."""
    text = text.strip()
    if not _INT_RE.fullmatch(text):
        return None
    return int(text)


def is_port_in_range(port: int, spec: str) -> bool:
    """Check whether a port matches a range spec.

    Args:
        port: Port number to test
        spec: Range spec, ``"8080"`` or ``"3000-3010"``

    Returns:
        True if the port matches, False otherwise (including malformed specs)

    Examples:
        is_port_in_range(3005, "3000-3010") -> True
        is_port_in_range(8081, "8080") -> False
        is_port_in_range(5000, "abc-def") -> False
    """
    if "-" in spec:
        parts = spec.split("-")
        if len(parts) != 2:
            return False

        start = _parse_int(parts[0])
        end = _parse_int(parts[1])
        if start is None or end is None:
            return False

        return start <= port <= end

    single = _parse_int(spec)
    if single is None:
        return False
    return port == single


def is_port_blocked(port: int, blocked_ports: Iterable["BlockedPort"]) -> bool:
    """Check whether a port matches any blocked-port rule.

    Args:
        port: Port number to test
        blocked_ports: Blocked-port rules to scan

    Returns:
        True on the first matching rule, False if none match
    """
    return any(is_port_in_range(port, bp.ports) for bp in blocked_ports)
