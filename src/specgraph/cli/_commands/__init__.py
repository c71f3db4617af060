"""specgraph CLI commands."""
# pyright: reportUnusedCallResult=false

from __future__ import annotations

from typing import TYPE_CHECKING

from ._analyze import app as analyze_app
from ._config import app as config_app

if TYPE_CHECKING:
    from cyclopts import App

__all__ = ["analyze_app", "config_app", "register_commands"]


def register_commands(app: App) -> None:
    """Register every command group on the root app."""
    app.command(analyze_app)
    app.command(config_app)

    @app.command(name="--prefix")
    def _prefix() -> None:  # pyright: ignore[reportUnusedFunction]
        """Show specgraph's install path."""
        from specgraph.utils import get_package_dir  # noqa: PLC0415

        print(get_package_dir())  # noqa: T201
