"""
asyncops Metadata Module - project defaults read from YAML.

Defaults live in ``config/asyncops_metadata.yaml`` at the project root, with
optional per-environment overlays in ``config/environment/<env>.yaml``.
Environment variables are applied on top by the pydantic settings classes in
``asyncops.config.settings``.
"""

import os
from pathlib import Path
from typing import Any

import yaml

from asyncops.errors.error_codes import ErrorCodes
from asyncops.errors.exceptions import ConfigurationError

# Path to project root
PROJECT_ROOT = Path(__file__).parent.parent

# Path to metadata file
METADATA_FILE = PROJECT_ROOT / "config" / "asyncops_metadata.yaml"

# Environment variable prefix
ENV_PREFIX = "ASYNCOPS_"


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(
            message=f"Cannot parse {path.name}: {e}",
            error_code=ErrorCodes.CONFIG_LOAD_FAILED,
            details={"path": str(path)},
        ) from e


def get_environment() -> str:
    """Get the current environment name from environment variable or default."""
    return os.environ.get(f"{ENV_PREFIX}ENVIRONMENT", "development")


def _load_environment_config(env: str) -> dict[str, Any]:
    return _read_yaml(PROJECT_ROOT / "config" / "environment" / f"{env}.yaml")


_metadata = _read_yaml(METADATA_FILE)
_env_config = _load_environment_config(get_environment())


def reload_config() -> None:
    """Reload configuration from disk."""
    global _metadata, _env_config
    _metadata = _read_yaml(METADATA_FILE)
    _env_config = _load_environment_config(get_environment())


def _lookup(source: dict[str, Any], parts: list[str]) -> tuple[bool, Any]:
    current: Any = source
    for part in parts:
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            return False, None
    return True, current


def get(path: str, default: Any = None) -> Any:
    """
    Get a metadata value by dot-notation path.

    The environment overlay wins over the main metadata file.

    Example: get("workload.sites") -> ["https://www.yahoo.com", ...]
    """
    parts = path.split(".")
    for source in (_env_config, _metadata):
        found, value = _lookup(source, parts)
        if found:
            return value
    return default


# Project information
PROJECT_NAME = get("project.name", "asyncops")
PROJECT_DESCRIPTION = get("project.description", "")
