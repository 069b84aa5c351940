"""Registry layer for portreg - JSON-backed port assignment registry."""

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import (
    AlreadyInitializedError,
    InvalidPortError,
    NoPortsAvailableError,
    PortAlreadyAssignedError,
    PortBlockedError,
    PortNotAssignedError,
    RegistryIOError,
    RegistryParseError,
)
from .ranges import is_port_blocked

MIN_PORT = 1
MAX_PORT = 65535

AUTO_ASSIGN_START = 3100
AUTO_ASSIGN_END = 65535

FILE_MODE = 0o644
DIR_MODE = 0o755


def _optional_text(entry: dict[str, Any], key: str) -> str | None:
    """Read an optional string field, normalizing empty strings to None."""
    value = entry.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string")
    return value or None


@dataclass(frozen=True)
class Assignment:
    """A reservation of one port for one project."""

    port: int
    description: str | None = None
    path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the document form, omitting unset fields."""
        data: dict[str, Any] = {"port": self.port}
        if self.description:
            data["description"] = self.description
        if self.path:
            data["path"] = self.path
        return data

    @classmethod
    def from_dict(cls, entry: Any) -> "Assignment":
        """Build an assignment from a document entry.

        Raises:
            ValueError: If the entry does not match the schema
        """
        if not isinstance(entry, dict):
            raise ValueError("assignment must be an object")
        port = entry.get("port")
        # bool is an int subclass; JSON true/false is not a port
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("assignment 'port' must be an integer")
        if not MIN_PORT <= port <= MAX_PORT:
            raise ValueError(f"assignment port {port} is outside {MIN_PORT}-{MAX_PORT}")
        return cls(
            port=port,
            description=_optional_text(entry, "description"),
            path=_optional_text(entry, "path"),
        )


@dataclass(frozen=True)
class BlockedPort:
    """A rule forbidding assignment of a single port or an inclusive range."""

    ports: str  # "N" or "N-M"
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the document form, omitting unset fields."""
        data: dict[str, Any] = {"ports": self.ports}
        if self.description:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, entry: Any) -> "BlockedPort":
        """Build a blocked-port rule from a document entry.

        The range text is not validated here; malformed specs are inert.

        Raises:
            ValueError: If the entry does not match the schema
        """
        if not isinstance(entry, dict):
            raise ValueError("blocked port must be an object")
        ports = entry.get("ports")
        if not isinstance(ports, str):
            raise ValueError("blocked port 'ports' must be a string")
        return cls(ports=ports, description=_optional_text(entry, "description"))


DEFAULT_BLOCKED_PORTS: tuple[BlockedPort, ...] = (
    BlockedPort("3306", "MySQL default port"),
    BlockedPort("5432", "PostgreSQL default port"),
    BlockedPort("6379", "Redis default port"),
    BlockedPort("8080", "Common HTTP alternative port"),
    BlockedPort("27017", "MongoDB default port"),
)


class Registry:
    """Port assignments and blocked-port rules backed by a JSON file.

    Every mutation is persisted with a full atomic rewrite of the file before
    it becomes visible in memory. There is no cross-process locking: two
    processes mutating the same file concurrently race, and the last writer
    wins.
    """

    def __init__(
        self,
        path: Path,
        assignments: list[Assignment] | None = None,
        blocked_ports: list[BlockedPort] | None = None,
    ) -> None:
        """Initialize an in-memory registry.

        Use :meth:`load` to read an existing file.

        Args:
            path: Path to the registry file
            assignments: Initial assignments, in file order
            blocked_ports: Initial blocked-port rules, in file order
        """
        self._path = Path(path)
        self._assignments: list[Assignment] = list(assignments or [])
        self._blocked_ports: list[BlockedPort] = list(blocked_ports or [])

    @classmethod
    def load(cls, path: Path) -> "Registry":
        """Load a registry from disk.

        A missing file yields an empty registry.

        Args:
            path: Path to the registry file

        Returns:
            Registry instance

        Raises:
            RegistryParseError: If the file is not a valid registry document
            RegistryIOError: If the file exists but cannot be read
        """
        path = Path(path)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return cls(path)
        except OSError as e:
            raise RegistryIOError(path, "failed to read registry file") from e

        try:
            document = json.loads(raw)
        except (UnicodeDecodeError, ValueError, RecursionError) as e:
            # ValueError covers JSONDecodeError and the int digit limit
            raise RegistryParseError(path, str(e)) from e

        assignments, blocked_ports = _decode_document(path, document)
        return cls(path, assignments, blocked_ports)

    @property
    def path(self) -> Path:
        """Path to the registry file."""
        return self._path

    @property
    def blocked_ports(self) -> list[BlockedPort]:
        """Blocked-port rules, in file order."""
        return list(self._blocked_ports)

    def exists(self) -> bool:
        """Check whether the registry file exists on disk."""
        return self._path.exists()

    def init(self) -> None:
        """Create the registry file seeded with default blocked ports.

        Raises:
            AlreadyInitializedError: If the registry file already exists
            RegistryIOError: If the file cannot be written
        """
        if self.exists():
            raise AlreadyInitializedError(self._path)

        blocked_ports = list(DEFAULT_BLOCKED_PORTS)
        self._write([], blocked_ports)
        self._assignments = []
        self._blocked_ports = blocked_ports

    def save(self) -> None:
        """Persist the current state to disk atomically.

        Raises:
            RegistryIOError: If the file cannot be written
        """
        self._write(self._assignments, self._blocked_ports)

    def assign_port(
        self, port: int, description: str | None = None, path: str | None = None
    ) -> Assignment:
        """Assign a specific port to a project.

        Args:
            port: Port number to assign
            description: Optional label
            path: Optional project path

        Returns:
            The new assignment

        Raises:
            InvalidPortError: If the port is outside 1-65535
            PortAlreadyAssignedError: If the port already has an assignment
            PortBlockedError: If the port matches a blocked-port rule
            RegistryIOError: If the registry cannot be saved
        """
        if not MIN_PORT <= port <= MAX_PORT:
            raise InvalidPortError(port)

        existing = self.get_assignment(port)
        if existing is not None:
            raise PortAlreadyAssignedError(port, existing.description)

        if self.is_port_blocked(port):
            raise PortBlockedError(port)

        assignment = Assignment(
            port=port, description=description or None, path=path or None
        )
        self._commit([*self._assignments, assignment])
        return assignment

    def assign_next_available(
        self, description: str | None = None, path: str | None = None
    ) -> int:
        """Assign the lowest available port starting at 3100.

        Args:
            description: Optional label
            path: Optional project path

        Returns:
            The assigned port number

        Raises:
            NoPortsAvailableError: If every port up to 65535 is taken or blocked
            RegistryIOError: If the registry cannot be saved
        """
        assigned = {a.port for a in self._assignments}
        for port in range(AUTO_ASSIGN_START, AUTO_ASSIGN_END + 1):
            if port in assigned or self.is_port_blocked(port):
                continue
            self.assign_port(port, description, path)
            return port

        raise NoPortsAvailableError(AUTO_ASSIGN_START, AUTO_ASSIGN_END)

    def unassign_port(self, port: int) -> Assignment:
        """Release a port assignment.

        Args:
            port: Port number to release

        Returns:
            The removed assignment

        Raises:
            PortNotAssignedError: If the port has no assignment
            RegistryIOError: If the registry cannot be saved
        """
        removed = self.get_assignment(port)
        if removed is None:
            raise PortNotAssignedError(port)

        self._commit([a for a in self._assignments if a.port != port])
        return removed

    def list_assignments(self) -> list[Assignment]:
        """Get all assignments in insertion order."""
        return list(self._assignments)

    def get_assignment(self, port: int) -> Assignment | None:
        """Get the assignment for a port, or None if unassigned."""
        for assignment in self._assignments:
            if assignment.port == port:
                return assignment
        return None

    def is_port_blocked(self, port: int) -> bool:
        """Check whether a port matches any blocked-port rule."""
        return is_port_blocked(port, self._blocked_ports)

    def is_port_available(self, port: int) -> bool:
        """Check whether a port is neither assigned nor blocked."""
        return self.get_assignment(port) is None and not self.is_port_blocked(port)

    def _commit(self, assignments: list[Assignment]) -> None:
        """Persist new assignments, then make them the in-memory state."""
        self._write(assignments, self._blocked_ports)
        self._assignments = assignments

    def _write(
        self, assignments: list[Assignment], blocked_ports: list[BlockedPort]
    ) -> None:
        """Write a document via a temporary file renamed over the target.

        Raises:
            RegistryIOError: On any filesystem failure; the previous file
                content is left intact
        """
        document = {
            "assignments": [a.to_dict() for a in assignments],
            "blockedPorts": [bp.to_dict() for bp in blocked_ports],
        }
        content = json.dumps(document, indent=2) + "\n"

        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True, mode=DIR_MODE)
        except OSError as e:
            raise RegistryIOError(directory, "failed to create directory") from e

        try:
            tmp = tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            )
        except OSError as e:
            raise RegistryIOError(directory, "failed to create temporary file") from e

        tmp_path = Path(tmp.name)
        try:
            with tmp:
                tmp.write(content)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.chmod(tmp_path, FILE_MODE)
            os.replace(tmp_path, self._path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise RegistryIOError(self._path, "failed to save registry") from e


def _decode_document(
    path: Path, document: Any
) -> tuple[list[Assignment], list[BlockedPort]]:
    """Validate a parsed document and build the model collections.

    Raises:
        RegistryParseError: If the document does not match the schema
    """
    if not isinstance(document, dict):
        raise RegistryParseError(path, "document must be a JSON object")

    raw_assignments = document.get("assignments")
    raw_blocked = document.get("blockedPorts")
    if raw_assignments is None:
        raw_assignments = []
    if raw_blocked is None:
        raw_blocked = []
    if not isinstance(raw_assignments, list):
        raise RegistryParseError(path, "'assignments' must be a list")
    if not isinstance(raw_blocked, list):
        raise RegistryParseError(path, "'blockedPorts' must be a list")

    try:
        assignments = [Assignment.from_dict(entry) for entry in raw_assignments]
        blocked_ports = [BlockedPort.from_dict(entry) for entry in raw_blocked]
    except ValueError as e:
        raise RegistryParseError(path, str(e)) from e

    return assignments, blocked_ports
