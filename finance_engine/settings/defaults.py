"""Configuration loader for engine settings."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

from ..config import SETTINGS_DIR


def load_config(config_name: str, config_dir: Path | None = None) -> Dict[str, Any]:
    """Load a settings file by name.

    Args:
        config_name: Name of the settings file (without .json extension)
        config_dir: Directory to read from; defaults to ``config.SETTINGS_DIR``

    Returns:
        Dictionary containing the configuration

    Raises:
        FileNotFoundError: If the settings file doesn't exist
        json.JSONDecodeError: If the settings file is invalid JSON

    Example:
        >>> config = load_config('engine')
        >>> config['excluded_categories']
        ['Investments']
    """
    config_path = (config_dir or SETTINGS_DIR) / f"{config_name}.json"

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return json.load(f)


@lru_cache(maxsize=None)
def get_engine_config() -> Dict[str, Any]:
    """Get the engine configuration.

    The file is read once per process; callers must treat the returned
    dictionary as read-only.

    Returns:
        Engine configuration with categories, budget types, fixed deposits
        and the fund watchlist
    """
    return load_config('engine')


def get_config_value(config_name: str, *keys: str, default: Any = None) -> Any:
    """Look up a nested setting, e.g. a category's budget type.

    The engine settings come from the per-process cache; other files are
    read on demand.  A missing file or key yields ``default``.

    Example:
        >>> get_config_value('engine', 'category_budget_types', 'Bills')
        'need'
    """
    try:
        node = get_engine_config() if config_name == 'engine' else load_config(config_name)
    except FileNotFoundError:
        return default
    for key in keys:
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node
