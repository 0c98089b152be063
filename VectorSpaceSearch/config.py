"""
Configuration loading for the search engine.
"""
import copy
import json
import os
from typing import Any, Dict, Optional

from loguru import logger

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_CONFIG_PATH = os.path.join(PACKAGE_DIR, "config.json")

DEFAULT_CONFIG: Dict[str, Any] = {
    "search": {
        "similarity_threshold": 1e-3,
        "max_results": 10,
    },
    "preprocessing": {
        "stop_words": {
            "use": True,
            "path": "preprocessing/data/stopwords-hr.txt",
            "encoding": "utf-8",
        },
    },
    "documents": {
        "encoding": "utf-8",
    },
    "logging": {
        "level": "INFO",
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from file, falling back to default settings.

    Args:
        config_path: Path to a JSON config file (defaults to the packaged config.json)

    Returns:
        Configuration dictionary with every default key present
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = config_path or DEFAULT_CONFIG_PATH

    if not os.path.exists(config_path):
        logger.warning("Config file {} not found, using default settings", config_path)
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            _merge(config, json.load(f))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not load config: {}, using default settings", e)
        return copy.deepcopy(DEFAULT_CONFIG)

    return config


def resolve_path(path: str) -> str:
    """
    Resolve a path from the config.
    Relative paths that do not exist from the working directory are taken relative to the package.
    """
    if os.path.isabs(path) or os.path.exists(path):
        return path
    return os.path.join(PACKAGE_DIR, path)
