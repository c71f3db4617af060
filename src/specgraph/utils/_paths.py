from importlib.resources import files
from pathlib import Path

MARKER_DIR_NAME = ".specgraph"


def find_project_root(start: Path | None = None) -> Path | None:
    """Find the project root by searching upward for a .specgraph/ directory.

    Args:
        start: Directory to start searching from. Defaults to the current
            working directory.

    Returns:
        The directory containing ``.specgraph/``, or None if the filesystem
        root is reached without finding one.
    """
    current = (start or Path.cwd()).resolve()

    while True:
        if (current / MARKER_DIR_NAME).is_dir():
            return current
        parent = current.parent
        if parent == current:  # Reached filesystem root
            return None
        current = parent


def get_project_root() -> Path:
    """Get the project root, falling back to the current directory."""
    return find_project_root() or Path.cwd()


def get_specgraph_dir(project_root: Path | None = None) -> Path:
    """Get the path to the .specgraph/ directory of a project."""
    return (project_root or get_project_root()) / MARKER_DIR_NAME


def get_log_dir(project_root: Path | None = None) -> Path:
    """Get the path to the logs/ directory inside .specgraph/."""
    return get_specgraph_dir(project_root) / "logs"


def get_cli_log_file(project_root: Path | None = None) -> Path:
    """Get the path to the CLI log file inside .specgraph/logs/."""
    return get_log_dir(project_root) / "cli.log"


def get_package_dir() -> Path:
    """Get the installed specgraph package directory."""
    return Path(str(files("specgraph")))
