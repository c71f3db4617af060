"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "storage": {
        "specs_dir": "specs",
    },
    "analysis": {
        "coverage_warning": 70,
        "requirements_warning": 80,
        "components_warning": 90,
        "health_improvement": 80,
        "cycle_penalty": 5,
        "max_cycle_penalty": 30,
        "unresolved_penalty": 5,
        "max_unresolved_penalty": 25,
        "max_depth": 10,
        "max_depth_penalty": 20,
        "max_nodes": 100,
        "max_nodes_penalty": 15,
        "validation_error_penalty": 10,
    },
}
