"""Error types raised by the port registry."""

from pathlib import Path


class PortregError(Exception):
    """Base class for all registry errors."""

    pass


class AlreadyInitializedError(PortregError):
    """Raised when init is called against an existing registry file."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"registry file already exists at {path}")


class PortAlreadyAssignedError(PortregError):
    """Raised when assigning a port that already has an assignment."""

    def __init__(self, port: int, description: str | None) -> None:
        self.port = port
        self.description = description
        super().__init__(
            f"port {port} is already assigned to '{description or ''}'"
        )


class PortNotAssignedError(PortregError):
    """Raised when unassigning a port that has no assignment."""

    def __init__(self, port: int) -> None:
        self.port = port
        super().__init__(f"port {port} is not assigned")


class PortBlockedError(PortregError):
    """Raised when a port matches a blocked-port rule."""

    def __init__(self, port: int) -> None:
        self.port = port
        super().__init__(f"port {port} is in a blocked range")


class NoPortsAvailableError(PortregError):
    """Raised when every candidate port is assigned or blocked."""

    def __init__(self, start: int, end: int) -> None:
        self.start = start
        self.end = end
        super().__init__(f"no available ports found (tried range {start}-{end})")


class RegistryParseError(PortregError):
    """Raised when the registry file is not a valid registry document."""

    def __init__(self, path: Path | None, reason: str) -> None:
        self.path = path
        self.reason = reason
        where = f" {path}" if path is not None else ""
        super().__init__(f"failed to parse registry{where}: {reason}")


class RegistryIOError(PortregError):
    """Raised when the registry file cannot be read or written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class InvalidPortError(PortregError, ValueError):
    """Raised when a port number is outside 1-65535."""

    def __init__(self, port: int) -> None:
        self.port = port
        super().__init__(f"invalid port {port}: must be between 1 and 65535")
