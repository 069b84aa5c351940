"""Assign command - reserve a port for a project."""

from pathlib import Path

import typer

from ..errors import NoPortsAvailableError, PortAlreadyAssignedError, PortregError
from .common import LIST_HINT, abort, debug, escape, load_registry, success


def assign(
    ctx: typer.Context,
    port: int = typer.Option(
        0,
        "-p",
        "--port",
        min=0,
        max=65535,
        help="Specific port to assign (default: next available from 3100)",
    ),
    description: str | None = typer.Option(
        None, "-d", "--description", help="Description for the port assignment"
    ),
    path: str | None = typer.Option(
        None, "--path", help="Project path (defaults to current directory)"
    ),
    quiet: bool = typer.Option(False, "-q", "--quiet", help="Output only the port number"),
) -> None:
    """Assign a port to a project.

    If no port is specified, assigns the next available port starting from 3100.

    Examples:
        portreg assign -d "my api"
        portreg assign --port 4000 -d frontend
        PORT=$(portreg assign -q)
    """
    registry = load_registry(ctx)

    if not path:
        path = str(Path.cwd())

    try:
        if port > 0:
            registry.assign_port(port, description, path)
            assigned = port
        else:
            assigned = registry.assign_next_available(description, path)
    except PortAlreadyAssignedError as e:
        abort(e, LIST_HINT)
    except NoPortsAvailableError as e:
        abort(e, "Free ports with 'portreg unassign <port>'")
    except PortregError as e:
        abort(e)

    debug(f"assigned {assigned} (path={path})")

    if quiet:
        print(assigned)
    elif description:
        success(f"Assigned port {assigned} to {escape(description)}")
    else:
        success(f"Assigned port {assigned}")
