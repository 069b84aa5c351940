"""Portreg - static port assignment registry for development projects."""

__version__ = "0.1.0"

from .config import get_default_registry_path, get_registry_path
from .errors import (
    AlreadyInitializedError,
    NoPortsAvailableError,
    InvalidPortError,
    PortAlreadyAssignedError,
    PortBlockedError,
    PortNotAssignedError,
    PortregError,
    RegistryIOError,
    RegistryParseError,
)
from .ranges import is_port_blocked, is_port_in_range
from .registry import DEFAULT_BLOCKED_PORTS, Assignment, BlockedPort, Registry

__all__ = [
    "__version__",
    "Assignment",
    "BlockedPort",
    "Registry",
    "DEFAULT_BLOCKED_PORTS",
    "is_port_in_range",
    "is_port_blocked",
    "get_default_registry_path",
    "get_registry_path",
    "PortregError",
    "AlreadyInitializedError",
    "InvalidPortError",
    "PortAlreadyAssignedError",
    "PortNotAssignedError",
    "PortBlockedError",
    "NoPortsAvailableError",
    "RegistryParseError",
    "RegistryIOError",
]
