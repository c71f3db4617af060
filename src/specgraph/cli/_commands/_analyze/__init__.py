# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
"""Analyze commands for the specgraph CLI."""

# Importing the command module registers its commands on the app
from . import _commands as _commands
from ._app import app

__all__ = ["app"]
