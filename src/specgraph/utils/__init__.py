"""Shared utilities for specgraph."""

from ._logging import LogFormatType, create_cli_logger, create_null_logger
from ._paths import (
    MARKER_DIR_NAME,
    find_project_root,
    get_cli_log_file,
    get_log_dir,
    get_package_dir,
    get_project_root,
    get_specgraph_dir,
)

__all__ = [
    "MARKER_DIR_NAME",
    "LogFormatType",
    "create_cli_logger",
    "create_null_logger",
    "find_project_root",
    "get_cli_log_file",
    "get_log_dir",
    "get_package_dir",
    "get_project_root",
    "get_specgraph_dir",
]
