#!/usr/bin/env python3

import os
import json
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

import logging
import sys

import yaml

from .exit_codes import ConfigError

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr) # Default to stderr
    ]
)
logger = logging.getLogger("gyros")

CONFIG_ENV_VAR = "GYROS_CONFIG"
CONFIG_FILENAMES = ['.gyros.toml', '.gyros.yaml', '.gyros.yml', '.gyros.json']

DEFAULT_FALLBACK_BRANCH = "master"


def get_config_path(cwd: Optional[Path] = None) -> Path:
    """Get the path to the configuration file.

    Checks in order:
    1. GYROS_CONFIG environment variable
    2. .gyros.toml / .gyros.yaml / .gyros.yml / .gyros.json in the working directory

    If nothing exists, the default .gyros.toml path is returned so the
    caller can report it as missing.
    """
    if CONFIG_ENV_VAR in os.environ:
        return Path(os.environ[CONFIG_ENV_VAR]).expanduser()

    base = Path(cwd) if cwd else Path.cwd()
    for filename in CONFIG_FILENAMES:
        path = base / filename
        if path.exists():
            return path

    return base / CONFIG_FILENAMES[0]


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load the configuration document.

    Args:
        path: Explicit config file; discovered with get_config_path() if None

    Returns:
        The deserialized document

    Raises:
        ConfigError: If the file is missing, unreadable or not valid
    """
    config_path = Path(path) if path else get_config_path()
    logger.debug(f"Loading config from {config_path}")

    if not config_path.is_file():
        raise ConfigError(f"No config file found at {config_path}")

    suffix = config_path.suffix.lower()
    try:
        if suffix == '.toml':
            with open(config_path, 'rb') as f:
                data = tomllib.load(f)
        elif suffix in ['.yaml', '.yml']:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        else:
            # Default to JSON format
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot parse {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a table at the top level")

    return data


def repos_from_config(config: Dict[str, Any]) -> Dict[str, str]:
    """Extract the alias -> path mapping from a loaded config.

    The `repos` key may be a table of alias = path, or a flat list of
    paths in which case each alias is the path's final component.
    Insertion order follows the file.
    """
    repos = config.get('repos')
    if repos is None:
        raise ConfigError("No repos found in config")

    if isinstance(repos, list):
        mapping: Dict[str, str] = {}
        for path in repos:
            if not isinstance(path, str) or not path:
                raise ConfigError(f"Repository path must be a non-empty string, got {path!r}")
            alias = alias_from_path(path)
            if not alias:
                raise ConfigError(f"Cannot derive an alias from path {path!r}")
            if alias in mapping:
                raise ConfigError(
                    f"Duplicate alias '{alias}' ({mapping[alias]} and {path}); "
                    "use a [repos] table to name them"
                )
            mapping[alias] = path
        return mapping

    if isinstance(repos, dict):
        for alias, path in repos.items():
            if not isinstance(alias, str) or not alias:
                raise ConfigError(f"Repository alias must be a non-empty string, got {alias!r}")
            if not isinstance(path, str) or not path:
                raise ConfigError(f"Path for '{alias}' must be a non-empty string, got {path!r}")
        return dict(repos)

    raise ConfigError(f"'repos' must be a table or a list, got {type(repos).__name__}")


def alias_from_path(path: str) -> str:
    """Final path component, ignoring trailing separators."""
    return Path(path.rstrip('/\\') or path).name


def _string_setting(config: Dict[str, Any], key: str, default: str) -> str:
    """A non-empty string setting, or its default when absent."""
    if key not in config:
        return default
    value = config[key]
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'{key}' must be a non-empty string, got {value!r}")
    return value


def get_fallback_branch(config: Dict[str, Any]) -> str:
    return _string_setting(config, 'fallback_branch', DEFAULT_FALLBACK_BRANCH)


def get_executables(config: Dict[str, Any]) -> Dict[str, str]:
    """Executable names for git and the branch-search tool."""
    return {
        'git': _string_setting(config, 'git', 'git'),
        'grep': _string_setting(config, 'grep', 'grep'),
    }
