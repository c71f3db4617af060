# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
"""Config commands for the specgraph CLI."""

from . import _commands as _commands
from ._app import app

__all__ = ["app"]
