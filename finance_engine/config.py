"""Configuration management for the finance engine.

This module centralizes the numeric defaults the engine falls back to
when a caller does not pass an explicit value.  Every constant can be
overridden through an environment variable so that deployments can tune
budgets and projection limits without code changes.
"""

from __future__ import annotations

import os
from decimal import Decimal
from pathlib import Path

# Settings directory - JSON files shipped alongside the package
SETTINGS_DIR = Path(
    os.getenv("FINENGINE_SETTINGS_DIR", Path(__file__).parent / "settings")
).resolve()

# Budget ceilings (currency units per month)
MONTHLY_BUDGET = Decimal(os.getenv("FINENGINE_MONTHLY_BUDGET", "25000"))
DEFAULT_NEEDS_BUDGET = Decimal(os.getenv("FINENGINE_NEEDS_BUDGET", "15000"))
DEFAULT_WANTS_BUDGET = Decimal(os.getenv("FINENGINE_WANTS_BUDGET", "10000"))

# Goal projection
GOAL_HORIZON_MONTHS = int(os.getenv("FINENGINE_GOAL_HORIZON_MONTHS", "600"))
DEFAULT_SAVINGS_RATE = Decimal(os.getenv("FINENGINE_DEFAULT_SAVINGS_RATE", "0.30"))
SAVINGS_LOOKBACK_MONTHS = int(os.getenv("FINENGINE_SAVINGS_LOOKBACK_MONTHS", "3"))

# Julian year used for day-count based tenure arithmetic
DAYS_PER_YEAR = 365.25


def get_settings_dir() -> str:
    """Get the settings directory as a string."""
    return str(SETTINGS_DIR)
