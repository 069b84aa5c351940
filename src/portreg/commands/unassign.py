"""Unassign command - release a port assignment."""

import typer

from ..errors import PortNotAssignedError, PortregError
from .common import LIST_HINT, abort, debug, load_registry, success


def unassign(
    ctx: typer.Context,
    port: int = typer.Argument(..., help="Port number to release"),
) -> None:
    """Release a port assignment.

    Examples:
        portreg unassign 3100
    """
    registry = load_registry(ctx)

    try:
        removed = registry.unassign_port(port)
    except PortNotAssignedError as e:
        abort(e, LIST_HINT)
    except PortregError as e:
        abort(e)

    debug(f"unassigned {removed.port} ({removed.description or '-'})")
    success(f"Unassigned port {port}")
