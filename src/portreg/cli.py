"""Typer CLI for portreg - Main entry point."""

from pathlib import Path

import typer

from . import __version__
from .commands import assign, check, init, list_cmd, unassign, version
from .config import get_registry_path

app = typer.Typer(
    name="portreg",
    help="A port registry tool to manage port assignments across projects",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"portreg version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    registry: Path | None = typer.Option(
        None,
        "--registry",
        "-r",
        envvar="PORTREG_REGISTRY",
        help="Path to registry file (default: ~/.portreg.json)",
    ),
) -> None:
    """Manage static port assignments to avoid conflicts between projects."""
    ctx.ensure_object(dict)["registry_path"] = get_registry_path(registry)


# Register all commands
app.command()(init)
app.command()(assign)
app.command()(unassign)
app.command(name="list")(list_cmd)
app.command()(check)
app.command()(version)


def main() -> None:
    """Main entry point."""
    app()
