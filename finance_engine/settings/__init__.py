"""Engine settings files and loaders.

Static lookup data (the category list, the category to budget-type table,
configured fixed deposits and the fund watchlist) lives in JSON files in
this directory so it can be modified without code changes.
"""

from .defaults import load_config, get_engine_config, get_config_value

__all__ = ['load_config', 'get_engine_config', 'get_config_value']
