"""Configuration loading for the CLI entry point."""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, NoReturn

from specgraph.exceptions import ConfigError

from ._models import Config

if TYPE_CHECKING:
    from pathlib import Path

STRICT_CONFIG_ENV = "SPECGRAPH_STRICT_CONFIG"


def _abort(message: str) -> NoReturn:
    print(f"Error: {message}", file=sys.stderr)  # noqa: T201
    sys.exit(1)


def _describe(error: Exception) -> tuple[str, str]:
    """Return the error text and the warning shown when falling back."""
    if isinstance(error, ConfigError):
        return str(error), f"Warning: Failed to load config: {error}"
    if isinstance(error, FileNotFoundError):
        return str(error), f"Warning: Config file not found: {error}"
    text = f"Failed to load config: {error}"
    return text, f"Warning: {text}"


def safe_load_config(
    *,
    config_path: Path | None = None,
    project_root: Path | None = None,
    cli_overrides: dict[str, object] | None = None,
) -> tuple[Config, str | None]:
    """Load configuration without letting a bad file stop the CLI.

    A broken source prints a warning to stderr and yields the built-in
    defaults, unless ``SPECGRAPH_STRICT_CONFIG=1`` in which case the process
    exits with status 1. A ``config_path`` that does not exist always exits.

    Args:
        config_path: File given with ``--config``; replaces discovery.
        project_root: Root given with ``--project-root``.
        cli_overrides: Nested overrides from command-line flags.

    Returns:
        The configuration and the load error text, or None on success.
    """
    if config_path is not None and not config_path.exists():
        _abort(f"Config file not found: {config_path}")

    try:
        if config_path is not None:
            config = Config.from_file(config_path)
        else:
            config = Config.load(
                project_root=project_root,
                include_cli=cli_overrides is not None,
                cli_overrides=cli_overrides,
            )
    except (ConfigError, OSError) as e:
        error_text, warning = _describe(e)
    else:
        return config, None

    if os.environ.get(STRICT_CONFIG_ENV, "0") == "1":
        _abort(error_text)
    print(warning, file=sys.stderr)  # noqa: T201
    return Config.from_dict({}), error_text
