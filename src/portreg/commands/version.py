"""Version command."""

import typer

from .. import __version__


def version() -> None:
    """Print the version number of portreg."""
    typer.echo(f"portreg version {__version__}")
