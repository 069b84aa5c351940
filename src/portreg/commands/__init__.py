"""Command modules for portreg CLI."""

from .assign import assign
from .check import check
from .init import init
from .list import list_cmd
from .unassign import unassign
from .version import version

__all__ = [
    "assign",
    "check",
    "init",
    "list_cmd",
    "unassign",
    "version",
]
