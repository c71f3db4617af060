from collections.abc import Callable, Generator

import pytest
from rich.console import Console

from specgraph.cli import CLIContext, create_app


@pytest.fixture(autouse=True)
def _reset_cli_context() -> Generator[None]:
    yield
    CLIContext.reset()


@pytest.fixture
def specgraph_cli(console: Console) -> Callable[..., None]:
    """Create CLI app for testing.

    Returns a callable that runs the CLI, global options included, and
    suppresses SystemExit. Use specgraph_cli_with_exit_code when you need to
    check the exit code.
    """

    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> None:
        try:
            app.meta(list(args))
        except SystemExit:
            pass

    return _run


@pytest.fixture
def specgraph_cli_with_exit_code(console: Console) -> Callable[..., int]:
    """Create CLI app for testing that returns the exit code."""

    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        try:
            app.meta(list(args))
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run
