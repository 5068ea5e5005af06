"""Instrument return calculators.

* ``fixed_deposits`` - compound-interest value of configured fixed deposits
* ``mutual_funds`` - NAV based returns, CAGR and portfolio valuation
"""

from .fixed_deposits import (
    FDCalculation,
    FixedDepositConfig,
    calculate_fd,
    calculate_fd_values,
    compound_value,
    current_fd_value,
    load_fd_configs,
    years_between,
)
from .mutual_funds import (
    FundStats,
    NavPoint,
    PeriodReturn,
    PortfolioValue,
    WatchlistFund,
    calculate_fund_stats,
    cagr_return,
    load_watchlist,
    nav_on_or_before,
    parse_nav_history,
    portfolio_value,
    recent_nav_series,
    simple_return,
    stats_by_scheme,
)

__all__ = [
    # Fixed deposits
    'FDCalculation',
    'FixedDepositConfig',
    'calculate_fd',
    'calculate_fd_values',
    'compound_value',
    'current_fd_value',
    'load_fd_configs',
    'years_between',
    # Mutual funds
    'FundStats',
    'NavPoint',
    'PeriodReturn',
    'PortfolioValue',
    'WatchlistFund',
    'calculate_fund_stats',
    'cagr_return',
    'load_watchlist',
    'nav_on_or_before',
    'parse_nav_history',
    'portfolio_value',
    'recent_nav_series',
    'simple_return',
    'stats_by_scheme',
]
