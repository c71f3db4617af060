"""Cyclopts App definition for analyze commands."""

from cyclopts import App

app = App(
    name="analyze",
    help="Analyze coverage, dependencies, and health of the spec corpus",
    help_on_error=True,
)
