"""
Configuration caching infrastructure.

YAML files are cached together with their modification time; a changed mtime
invalidates the entry on the next access, so edits are picked up without a restart.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

logger = logging.getLogger(__name__)

# path -> (mtime, parsed content)
_config_cache: Dict[str, Tuple[float, Dict[str, Any]]] = {}
_cache_lock = threading.Lock()


def _get_file_mtime(file_path: Path) -> float:
    """Return the file's modification time, or 0.0 if it does not exist."""
    try:
        return file_path.stat().st_mtime
    except OSError:
        return 0.0


def _load_yaml_file(file_path: Path) -> Dict[str, Any]:
    """
    Load a YAML file into a dictionary.

    Returns an empty dict if the file is missing, empty or unparsable.
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning(f"Configuration file not found: {file_path}")
        return {}
    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML file {file_path}: {e}")
        return {}

    return data if isinstance(data, dict) else {}


def get_cached_config(file_path: Path, force_reload: bool = False) -> Dict[str, Any]:
    """
    Get configuration from cache, reloading if the file changed.

    Args:
        file_path: Path to the YAML file
        force_reload: Bypass the cache

    Returns:
        Parsed configuration dictionary
    """
    key = str(file_path)
    current_mtime = _get_file_mtime(file_path)

    with _cache_lock:
        cached = _config_cache.get(key)
        if not force_reload and cached is not None and cached[0] == current_mtime:
            return cached[1]

        config = _load_yaml_file(file_path)
        _config_cache[key] = (current_mtime, config)
        if cached is not None:
            logger.info(f"Reloaded configuration: {file_path.name}")
        return config


def clear_cache() -> None:
    """Drop every cached configuration file."""
    with _cache_lock:
        _config_cache.clear()
