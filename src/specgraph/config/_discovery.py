"""Where configuration can come from, highest precedence first."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import platformdirs

from specgraph.utils import MARKER_DIR_NAME, find_project_root

from ._defaults import DEFAULT_CONFIG
from ._models._common import ConfigSource, ConfigSourceName

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

PROJECT_CONFIG_NAME = "specgraph.toml"
LOCAL_CONFIG_NAME = "specgraph.local.toml"


def get_user_config_path() -> Path:
    r"""Per-user config file, e.g. ``~/.config/specgraph/config.toml`` on Linux.

    Resolved with platformdirs; the file need not exist.
    """
    return platformdirs.user_config_path("specgraph") / "config.toml"


def _on_disk(name: ConfigSourceName, path: Path) -> ConfigSource:
    try:
        exists = path.is_file()
    except OSError:
        exists = False
    return ConfigSource(name=name, path=path, exists=exists, values={})


def _iter_sources(
    project_root: Path | None,
    *,
    include_env: bool,
    cli_overrides: dict[str, Any] | None,  # pyright: ignore[reportExplicitAny]
) -> Iterator[ConfigSource]:
    if cli_overrides is not None:
        yield ConfigSource(
            name=ConfigSourceName.CLI,
            path=None,
            exists=bool(cli_overrides),
            values=cli_overrides,
        )
    if include_env:
        # Environment values are read at load time
        yield ConfigSource(
            name=ConfigSourceName.ENV, path=None, exists=True, values={}
        )
    if project_root is not None:
        marker = project_root / MARKER_DIR_NAME
        yield _on_disk(ConfigSourceName.LOCAL, marker / LOCAL_CONFIG_NAME)
        yield _on_disk(ConfigSourceName.PROJECT, marker / PROJECT_CONFIG_NAME)
    yield _on_disk(ConfigSourceName.USER, get_user_config_path())
    yield ConfigSource(
        name=ConfigSourceName.DEFAULT, path=None, exists=True, values=DEFAULT_CONFIG
    )


def discover_sources(
    project_root: Path | None = None,
    *,
    include_env: bool = True,
    include_cli: bool = False,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> list[ConfigSource]:
    """List configuration sources, highest precedence first.

    Files are stat'ed but not read; a missing file is still listed with
    ``exists=False``. The project's ``.specgraph/specgraph.local.toml`` and
    ``.specgraph/specgraph.toml`` are skipped when no project root is given
    and none is found above the working directory.

    Args:
        project_root: Project root, or None to search upward for
            ``.specgraph/``.
        include_env: List the ``SPECGRAPH_*`` environment source.
        include_cli: List the CLI override source.
        cli_overrides: Values for the CLI source.
    """
    root = project_root or find_project_root()
    overrides = (cli_overrides or {}) if include_cli else None
    return list(
        _iter_sources(root, include_env=include_env, cli_overrides=overrides)
    )
