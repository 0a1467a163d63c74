"""Persisted user defaults (~/.config/clonator/config.json).

The file is a flat JSON object. A file that cannot be parsed, or that holds
something other than an object, is ignored with a warning so a broken
config never blocks a clone.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


def global_config_dir() -> Path:
    config = Path.home() / ".config" / "clonator"
    config.mkdir(parents=True, exist_ok=True)
    return config


def config_path() -> Path:
    return global_config_dir() / CONFIG_FILENAME


def load_global_config() -> dict:
    path = config_path()
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", path)
        return {}
    return data


def save_global_config(config: dict) -> None:
    path = config_path()
    path.write_text(json.dumps(config, indent=2, sort_keys=True) + "\n")
