"""Check command - test whether a port can be assigned."""

import typer

from .common import error_console, escape, load_registry, success


def check(
    ctx: typer.Context,
    port: int = typer.Argument(..., help="Port number to check"),
) -> None:
    """Check whether a port is available for assignment.

    Exits with status 1 if the port is assigned or blocked.

    Examples:
        portreg check 4000
    """
    registry = load_registry(ctx)

    if registry.is_port_available(port):
        success(f"Port {port} is available")
        return

    existing = registry.get_assignment(port)
    if existing is not None:
        label = f" to {escape(existing.description)}" if existing.description else ""
        error_console.print(f"[yellow]Port {port} is assigned{label}[/yellow]")
    else:
        error_console.print(f"[yellow]Port {port} is blocked[/yellow]")
    raise typer.Exit(1)
