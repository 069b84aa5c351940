"""Common utilities for CLI commands."""

from pathlib import Path
from typing import NoReturn

import typer
from rich.markup import escape

from ..console import console, debug, error, error_console, success, warning
from ..errors import PortregError
from ..registry import Registry

# Re-export console utilities
__all__ = [
    "console",
    "error_console",
    "debug",
    "success",
    "warning",
    "error",
    "escape",
    "abort",
    "get_registry_path",
    "load_registry",
]

LIST_HINT = "Use 'portreg list' to see all assignments"


def get_registry_path(ctx: typer.Context) -> Path:
    """Get the registry path resolved by the root callback."""
    return ctx.ensure_object(dict)["registry_path"]


def load_registry(ctx: typer.Context) -> Registry:
    """Load the registry for the current invocation, exiting on failure."""
    path = get_registry_path(ctx)
    debug(f"registry path = {path}")
    try:
        return Registry.load(path)
    except PortregError as e:
        abort(f"failed to load registry: {e}")


def abort(message: str | PortregError, hint: str | None = None) -> NoReturn:
    """Print an error (and optional hint) to stderr and exit with status 1."""
    text = escape(str(message))
    if hint:
        text = f"{text}. {hint}"
    error(text)
    raise typer.Exit(1)
