# pyright: reportAny=false, reportUnknownArgumentType=false
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from specgraph.config import DEFAULT_CONFIG, ConfigSourceName
from specgraph.config._discovery import discover_sources, get_user_config_path

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


@pytest.fixture
def user_config(monkeypatch: pytest.MonkeyPatch) -> Path:
    path = Path("/home/user/.config/specgraph/config.toml")
    monkeypatch.setattr(
        "specgraph.config._discovery.get_user_config_path", lambda: path
    )
    return path


class TestGetUserConfigPath:
    def test_returns_config_toml_in_specgraph_dir(self) -> None:
        result = get_user_config_path()

        assert result.name == "config.toml"
        assert result.parent.name == "specgraph"


class TestDiscoverSources:
    def test_orders_sources_by_precedence(
        self, fs: FakeFilesystem, user_config: Path
    ) -> None:
        fs.create_dir("/project/.specgraph")

        sources = discover_sources(
            Path("/project"), include_cli=True, cli_overrides={"a": 1}
        )

        assert [source.name for source in sources] == [
            ConfigSourceName.CLI,
            ConfigSourceName.ENV,
            ConfigSourceName.LOCAL,
            ConfigSourceName.PROJECT,
            ConfigSourceName.USER,
            ConfigSourceName.DEFAULT,
        ]

    def test_project_files_reported_with_existence(
        self, fs: FakeFilesystem, user_config: Path
    ) -> None:
        fs.create_file("/project/.specgraph/specgraph.toml", contents="")

        sources = {source.name: source for source in discover_sources(Path("/project"))}

        assert sources[ConfigSourceName.PROJECT].exists is True
        assert sources[ConfigSourceName.PROJECT].path == Path(
            "/project/.specgraph/specgraph.toml"
        )
        assert sources[ConfigSourceName.LOCAL].exists is False
        assert sources[ConfigSourceName.USER].exists is False

    def test_omits_project_sources_without_root(
        self, fs: FakeFilesystem, user_config: Path
    ) -> None:
        fs.create_dir("/elsewhere")
        fs.cwd = "/elsewhere"

        names = [source.name for source in discover_sources(include_env=False)]

        assert names == [ConfigSourceName.USER, ConfigSourceName.DEFAULT]

    def test_default_source_carries_defaults(
        self, fs: FakeFilesystem, user_config: Path
    ) -> None:
        sources = discover_sources(Path("/project"), include_env=False)

        assert sources[-1].values == DEFAULT_CONFIG

    def test_cli_source_without_overrides_is_marked_missing(
        self, fs: FakeFilesystem, user_config: Path
    ) -> None:
        sources = discover_sources(Path("/project"), include_cli=True)

        assert sources[0].name == ConfigSourceName.CLI
        assert sources[0].exists is False
