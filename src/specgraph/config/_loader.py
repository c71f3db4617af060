# pyright: reportAny=false, reportExplicitAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Reading TOML sources and combining configuration tables."""

from __future__ import annotations

import json
import os
import tomllib
from typing import TYPE_CHECKING, Any

from specgraph.exceptions import ConfigLoadError

if TYPE_CHECKING:
    from pathlib import Path

ENV_PREFIX = "SPECGRAPH_"
_ENV_SEPARATOR = "__"


def read_toml_file(path: Path) -> dict[str, Any]:
    """Parse a TOML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file is not valid TOML, with the position
            of the syntax error.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        raise ConfigLoadError(msg, path=path, line=e.lineno, column=e.colno) from e


def copy_value(value: Any) -> Any:
    """Deep-copy the tables and arrays of a configuration value."""
    if isinstance(value, dict):
        return {key: copy_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` onto ``base`` without touching either.

    Tables merge key by key. Any other value in ``override``, arrays
    included, replaces the one in ``base``.
    """
    merged = copy_value(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy_value(value)
    return merged


def set_nested_key(d: dict[str, Any], key_path: str, value: Any) -> None:
    """Assign ``value`` at a dotted path, creating tables along the way.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "storage.specs_dir", "docs/specs")
        >>> d
        {'storage': {'specs_dir': 'docs/specs'}}
    """
    *tables, leaf = key_path.split(".")
    node = d
    for table in tables:
        child = node.get(table)
        if not isinstance(child, dict):
            child = node[table] = {}
        node = child
    node[leaf] = value


def parse_string_value(value: str) -> Any:
    """Infer a typed value from an environment or command-line string.

    ``true``/``false`` (any case) become booleans, digits become an int, a
    number with a decimal point becomes a float, and a JSON array or object
    is decoded. Anything else stays a string.

    Examples:
        >>> parse_string_value("FALSE")
        False
        >>> parse_string_value("12")
        12
        >>> parse_string_value("0.5")
        0.5
        >>> parse_string_value("docs/specs")
        'docs/specs'
    """
    if value.lower() in {"true", "false"}:
        return value.lower() == "true"

    number_type = float if "." in value else int
    try:
        return number_type(value)
    except ValueError:
        pass

    if value[:1] + value[-1:] in {"[]", "{}"}:
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

    return value


def parse_env_vars(prefix: str = ENV_PREFIX) -> dict[str, Any]:
    """Collect ``SPECGRAPH_<SECTION>__<KEY>`` variables into nested tables.

    ``__`` separates table levels and names are lower-cased, so
    ``SPECGRAPH_ANALYSIS__MAX_DEPTH=4`` sets ``analysis.max_depth``. Variables
    without a separator, like ``SPECGRAPH_STRICT_CONFIG``, are process
    switches and are skipped.
    """
    values: dict[str, Any] = {}
    for name, raw in os.environ.items():
        if not name.startswith(prefix):
            continue
        key = name.removeprefix(prefix)
        if _ENV_SEPARATOR not in key:
            continue
        dotted = key.replace(_ENV_SEPARATOR, ".").lower()
        set_nested_key(values, dotted, parse_string_value(raw))
    return values
