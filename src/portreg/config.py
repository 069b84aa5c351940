"""Configuration management for portreg."""

from pathlib import Path

REGISTRY_FILENAME = ".portreg.json"


def get_default_registry_path() -> Path:
    """Get the default registry file path.

    Returns:
        Path to ``~/.portreg.json``
    """
    return Path.home() / REGISTRY_FILENAME


def get_registry_path(override: Path | None = None) -> Path:
    """Resolve the effective registry file path.

    Args:
        override: Explicit path from the command line or environment

    Returns:
        The override with ``~`` expanded, or the default path
    """
    if override is not None:
        return Path(override).expanduser()
    return get_default_registry_path()
