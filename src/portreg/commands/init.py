"""Init command - create the registry file."""

import typer

from ..errors import PortregError
from ..registry import Registry
from .common import abort, debug, escape, get_registry_path, success


def init(ctx: typer.Context) -> None:
    """Initialize the registry file with default blocked ports.

    Blocks the default ports of MySQL, PostgreSQL, Redis, MongoDB and 8080.

    Examples:
        portreg init
        portreg --registry ./ports.json init
    """
    path = get_registry_path(ctx)
    debug(f"registry path = {path}")
    registry = Registry(path)

    try:
        registry.init()
    except PortregError as e:
        abort(e)

    success(f"Initialized registry at {escape(str(path))}", soft_wrap=True)
