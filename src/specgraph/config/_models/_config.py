# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""The merged configuration object handed to the CLI and the services."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, TypeVar, overload

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

from specgraph.config._defaults import DEFAULT_CONFIG
from specgraph.config._loader import (
    copy_value,
    deep_merge,
    parse_env_vars,
    read_toml_file,
)
from specgraph.config._models._analysis import AnalysisThresholds
from specgraph.config._models._common import ConfigSource, ConfigSourceName
from specgraph.config._models._logging import LoggingConfig
from specgraph.config._models._storage import StorageConfig

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path
    from typing import Self

T = TypeVar("T")
SectionT = TypeVar("SectionT", bound=BaseModel)


def _lenient_section(model: type[SectionT], data: Any) -> SectionT:
    """Build a section, dropping each field whose value does not validate.

    Only reached with bad values when the caller skipped validation; the
    dropped fields take their model defaults.
    """
    values = dict(data) if isinstance(data, dict) else {}
    while True:
        try:
            return model.model_validate(values)
        except ValidationError as e:
            rejected = {err["loc"][0] for err in e.errors() if err["loc"]}
            if not rejected & values.keys():
                return model()
            values = {k: v for k, v in values.items() if k not in rejected}


def _source_values(source: ConfigSource) -> dict[str, Any]:
    if source.name in (ConfigSourceName.DEFAULT, ConfigSourceName.CLI):
        return source.values
    if source.name == ConfigSourceName.ENV:
        return parse_env_vars()
    if source.path is not None and source.exists:
        return read_toml_file(source.path)
    return {}


def _strip_defaults(data: dict[str, Any], defaults: dict[str, Any]) -> dict[str, Any]:
    changed: dict[str, Any] = {}
    for key, value in data.items():
        default = defaults.get(key)
        if isinstance(value, dict) and isinstance(default, dict):
            if nested := _strip_defaults(value, default):
                changed[key] = nested
        elif key not in defaults or value != default:
            changed[key] = copy_value(value)
    return changed


def _check(merged: dict[str, Any], source: str | None = None) -> None:
    from specgraph.config._validation import (  # noqa: PLC0415
        raise_if_validation_errors,
        validate_config,
    )

    raise_if_validation_errors(validate_config(merged), source=source)


class Config(BaseModel):
    """Merged specgraph configuration.

    The three known sections are typed fields. Everything else that was
    merged in, including keys the models ignore, stays reachable through
    :meth:`get` and :meth:`to_dict`. Build instances with :meth:`from_dict`,
    :meth:`from_file`, or :meth:`load`.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    analysis: AnalysisThresholds = Field(default_factory=AnalysisThresholds)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    _raw: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())

    @classmethod
    def _from_merged(
        cls, merged: dict[str, Any], sources: Sequence[ConfigSource] = ()
    ) -> Self:
        config = cls(
            analysis=_lenient_section(AnalysisThresholds, merged.get("analysis")),
            logging=_lenient_section(LoggingConfig, merged.get("logging")),
            storage=_lenient_section(StorageConfig, merged.get("storage")),
        )
        config._raw = merged
        config._sources = tuple(sources)
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, validate: bool = True) -> Self:
        """Merge ``data`` over the defaults.

        Raises:
            ConfigValidationError: If a value is invalid and ``validate`` is set.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        if validate:
            _check(merged)
        return cls._from_merged(merged)

    @classmethod
    def from_file(cls, path: Path, *, validate: bool = True) -> Self:
        """Merge a single TOML file over the defaults, ignoring other sources.

        This is what ``--config`` selects.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file is not valid TOML.
            ConfigValidationError: If a value is invalid and ``validate`` is set.
        """
        data = read_toml_file(path)
        merged = deep_merge(DEFAULT_CONFIG, data)
        if validate:
            _check(merged, source=str(path))
        source = ConfigSource(
            name=ConfigSourceName.PROJECT, path=path, exists=True, values=data
        )
        return cls._from_merged(merged, (source,))

    @classmethod
    def load(
        cls,
        *,
        project_root: Path | None = None,
        include_env: bool = True,
        include_cli: bool = False,
        cli_overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Discover every source and merge them.

        Precedence, lowest to highest: defaults, user file, project
        ``.specgraph/specgraph.toml``, ``.specgraph/specgraph.local.toml``,
        ``SPECGRAPH_<SECTION>__<KEY>`` environment variables, CLI overrides.

        Args:
            project_root: Project root. Searched upward for ``.specgraph/``
                when omitted.
            include_env: Whether environment variables take part.
            include_cli: Whether ``cli_overrides`` take part.
            cli_overrides: Nested override values from the command line.

        Raises:
            ConfigLoadError: If a discovered file is not valid TOML.
            ConfigValidationError: If the merged result is invalid.
        """
        from specgraph.config._discovery import discover_sources  # noqa: PLC0415

        discovered = discover_sources(
            project_root=project_root,
            include_env=include_env,
            include_cli=include_cli,
            cli_overrides=cli_overrides,
        )

        merged: dict[str, Any] = {}
        loaded: list[ConfigSource] = []
        # Discovery lists sources highest first
        for source in reversed(discovered):
            values = _source_values(source)
            if values:
                merged = deep_merge(merged, values)
            loaded.insert(
                0,
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                ),
            )

        _check(merged)
        return cls._from_merged(merged, loaded)

    @property
    def sources(self) -> list[ConfigSource]:
        """Contributing sources, highest precedence first."""
        return list(self._sources)

    @overload
    def get(self, key: str) -> Any: ...

    @overload
    def get(self, key: str, default: T) -> T: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``"analysis.max_depth"``.

        Returns ``default`` when any segment is missing or a parent is not a
        table.
        """
        node: Any = self._raw
        for segment in key.split("."):
            if not isinstance(node, dict) or segment not in node:
                return default
            node = node[segment]
        return node

    def to_dict(self, *, include_defaults: bool = True) -> dict[str, Any]:
        """Return a deep copy of the merged values.

        With ``include_defaults=False`` only values that differ from the
        built-in defaults are kept.
        """
        if include_defaults:
            return copy_value(self._raw)
        return _strip_defaults(self._raw, DEFAULT_CONFIG)

    def to_toml(self, *, include_defaults: bool = False) -> str:
        return tomli_w.dumps(self.to_dict(include_defaults=include_defaults))
