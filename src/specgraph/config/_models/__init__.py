"""Configuration models."""

from ._analysis import AnalysisThresholds
from ._common import ConfigSource, ConfigSourceName, LogFormat, LogLevel
from ._config import Config
from ._logging import LoggingConfig
from ._storage import StorageConfig

__all__ = [
    "AnalysisThresholds",
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "StorageConfig",
]
