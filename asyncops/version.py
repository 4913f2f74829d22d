"""
Version management for asyncops.

The version is read from pyproject.toml, which is the single source of truth.
"""

from pathlib import Path

import tomli

FALLBACK_VERSION = "1.0.0"


def _find_project_root() -> Path:
    """Find the directory containing pyproject.toml, starting next to this package."""
    package_root = Path(__file__).resolve().parent.parent
    for candidate in (package_root, Path.cwd()):
        if (candidate / "pyproject.toml").exists():
            return candidate
    return package_root


PROJECT_ROOT = _find_project_root()
PYPROJECT_PATH = PROJECT_ROOT / "pyproject.toml"


def get_version_from_pyproject() -> str:
    """
    Read the version string from pyproject.toml.

    Returns:
        The project version, or FALLBACK_VERSION when the file is missing or
        carries no version
    """
    try:
        with open(PYPROJECT_PATH, "rb") as f:
            pyproject_data = tomli.load(f)
        return pyproject_data["project"]["version"]
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        return FALLBACK_VERSION


__version__ = get_version_from_pyproject()


def get_version() -> str:
    """Get the current version of the asyncops package."""
    return __version__
