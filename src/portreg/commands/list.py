"""List command - show port assignments."""

import json

import typer
from rich.table import Table

from .common import console, escape, load_registry, warning

FORMATS = ("table", "json")


def list_cmd(
    ctx: typer.Context,
    format: str = typer.Option("table", "--format", help="Output format: table, json"),
    blocked: bool = typer.Option(False, "--blocked", help="Also show blocked ports"),
) -> None:
    """Display all assigned ports.

    Examples:
        portreg list
        portreg list --blocked
        portreg list --format json
    """
    if format not in FORMATS:
        raise typer.BadParameter(
            f"must be one of: {', '.join(FORMATS)}", param_hint="--format"
        )

    registry = load_registry(ctx)
    assignments = registry.list_assignments()

    if format == "json":
        if blocked:
            output = {
                "assignments": [a.to_dict() for a in assignments],
                "blockedPorts": [bp.to_dict() for bp in registry.blocked_ports],
            }
        else:
            output = [a.to_dict() for a in assignments]
        print(json.dumps(output, indent=2))
        return

    if not assignments:
        warning("No ports assigned")
    else:
        table = Table(title="Port Assignments")
        table.add_column("Port", style="yellow")
        table.add_column("Description", style="green")
        table.add_column("Path", style="dim")

        for a in assignments:
            table.add_row(str(a.port), escape(a.description or ""), escape(a.path or "-"))

        console.print(table)

    if blocked:
        table = Table(title="Blocked Ports")
        table.add_column("Ports", style="red")
        table.add_column("Description", style="dim")

        for bp in registry.blocked_ports:
            table.add_row(escape(bp.ports), escape(bp.description or ""))

        console.print(table)
