"""The ``specgraph`` application and its global options."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from specgraph import __version__
from specgraph.config import safe_load_config
from specgraph.utils import create_cli_logger

from ._commands import register_commands
from ._context import CLIContext

APP_HELP = "Dependency, coverage, and health analysis for spec corpora."


def _logging_overrides(*, verbose: bool, quiet: bool) -> dict[str, object] | None:
    # --verbose wins when both are given
    if verbose:
        return {"logging": {"level": "debug"}}
    if quiet:
        return {"logging": {"level": "error"}}
    return None


def build_context(
    command: str,
    *,
    verbose: bool = False,
    quiet: bool = False,
    no_color: bool = False,
    config: Path | None = None,
    project_root: Path | None = None,
) -> CLIContext:
    """Load configuration and open the log file for one invocation."""
    loaded, config_error = safe_load_config(
        config_path=config,
        project_root=project_root,
        cli_overrides=_logging_overrides(verbose=verbose, quiet=quiet),
    )
    logger = create_cli_logger(
        level=loaded.logging.level.value,
        log_format=loaded.logging.format.value,  # type: ignore[arg-type]
        log_file=loaded.logging.file,
        command=command,
        project_root=project_root,
    )
    if config_error is not None:
        logger.warning("config_fallback", error=config_error)
    return CLIContext(
        config=loaded,
        verbose=verbose,
        quiet=quiet,
        no_color=no_color,
        project_root=project_root,
        config_error=config_error,
        logger=logger,
    )


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the ``specgraph`` app with every command group registered.

    Global options are parsed by the meta app, which activates a
    :class:`CLIContext` and then dispatches the remaining tokens.

    Args:
        console: Output console; stdout when omitted.
        error_console: Console for parse errors; stderr when omitted.
        exit_on_error: Whether cyclopts exits on parse errors.
    """
    app = App(
        name="specgraph",
        help=APP_HELP,
        version=__version__,
        help_on_error=True,
        console=console or Console(),
        error_console=error_console or Console(stderr=True),
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _launch(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Log at debug level")] = False,
        quiet: Annotated[bool, Parameter(help="Log errors only")] = False,
        no_color: Annotated[
            bool, Parameter(name="--no-color", help="Disable colored output")
        ] = False,
        config: Annotated[
            Path | None,
            Parameter(name="--config", help="Config file replacing discovery"),
        ] = None,
        project_root: Annotated[
            Path | None, Parameter(name="--project-root", help="Path to project root")
        ] = None,
    ) -> None:
        """Run a specgraph command.

        Args:
            tokens: The command and its arguments.
            verbose: Log at debug level.
            quiet: Log errors only.
            no_color: Disable colored output.
            config: Config file replacing source discovery.
            project_root: Project root; searched upward when omitted.
        """
        ctx = build_context(
            " ".join(tokens[:2]),
            verbose=verbose,
            quiet=quiet,
            no_color=no_color,
            config=config,
            project_root=project_root,
        )
        with ctx.activate():
            app(tokens)

    register_commands(app)
    return app


def main() -> None:
    """Entry point of the ``specgraph`` script."""
    create_app().meta()
