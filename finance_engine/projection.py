"""Net worth, savings estimation and long-horizon goal projection.

This module contains the planning calculations: summing held assets into
a net worth figure, estimating how much the user saves per month, and
searching for the number of months a compounding contribution plan needs
to reach a target.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, Optional, Union

import numpy as np
import pandas as pd

from . import config, proration
from .budgets.categorization import savings_categories
from .models import AssetSnapshot, Transaction, TransactionKind, to_decimal
from .windows import Moment, resolve_anchors

logger = logging.getLogger(__name__)

ASSET_LABELS = OrderedDict([
    ('bank_savings', 'Bank Savings'),
    ('fixed_deposits', 'Fixed Deposits'),
    ('mutual_funds', 'Mutual Funds'),
    ('ppf', 'PPF'),
    ('epf', 'EPF'),
])

NO_SAVINGS = 'no_savings'
BEYOND_HORIZON = 'beyond_horizon'


@dataclass(frozen=True)
class GoalReached:
    months: int


@dataclass(frozen=True)
class GoalUnreachable:
    reason: str


GoalProjection = Union[GoalReached, GoalUnreachable]


@dataclass(frozen=True)
class InvestmentProjection:
    invested: int
    future_value: int
    returns: int


# ---------------------------------------------------------------------------
# Net worth
# ---------------------------------------------------------------------------


def _asset_values(
    snapshot: Optional[AssetSnapshot],
    mutual_funds_value,
    fixed_deposits_value,
) -> Dict[str, Decimal]:
    if snapshot is None:
        snapshot = AssetSnapshot()
    values = {name: getattr(snapshot, name) for name in ASSET_LABELS}
    if mutual_funds_value is not None:
        values['mutual_funds'] = to_decimal(mutual_funds_value)
    if fixed_deposits_value is not None:
        values['fixed_deposits'] = to_decimal(fixed_deposits_value)
    return values


def net_worth(
    snapshot: Optional[AssetSnapshot],
    *,
    mutual_funds_value=None,
    fixed_deposits_value=None,
) -> Decimal:
    """Sum the five asset fields of a snapshot.

    Args:
        snapshot: Stored holdings; None counts as an empty snapshot
        mutual_funds_value: Live portfolio valuation that replaces the
            stored mutual fund figure
        fixed_deposits_value: Accrued deposit value that replaces the
            stored principal

    Returns:
        Net worth as a Decimal
    """
    values = _asset_values(snapshot, mutual_funds_value, fixed_deposits_value)
    return sum(values.values(), Decimal(0))


def net_worth_breakdown(
    snapshot: Optional[AssetSnapshot],
    *,
    mutual_funds_value=None,
    fixed_deposits_value=None,
) -> Dict[str, Decimal]:
    """Label to value mapping of the non-zero assets, in display order."""
    values = _asset_values(snapshot, mutual_funds_value, fixed_deposits_value)
    return OrderedDict(
        (ASSET_LABELS[name], value) for name, value in values.items() if value > 0
    )


# ---------------------------------------------------------------------------
# Savings estimate
# ---------------------------------------------------------------------------


def monthly_savings_estimate(
    transactions: Iterable[Transaction],
    monthly_income,
    now: Moment,
) -> Decimal:
    """Estimate monthly savings as income minus trailing average expenses.

    The trailing window is the ``config.SAVINGS_LOOKBACK_MONTHS`` full
    calendar months before the current one.  Savings categories
    (Investments) are not consumption and are left out.  The average only
    counts months that have any expense.  Without income or history the
    estimate falls back to ``config.DEFAULT_SAVINGS_RATE`` of income.
    """
    income = to_decimal(monthly_income)
    fallback = max(Decimal(0), income * config.DEFAULT_SAVINGS_RATE)
    if income <= 0:
        return fallback

    current_month = resolve_anchors(now).start_of_month.date()
    months = [proration.add_months(current_month, -offset) for offset in range(1, config.SAVINGS_LOOKBACK_MONTHS + 1)]
    excluded = set(savings_categories())
    expenses = [
        t for t in transactions
        if t.kind == TransactionKind.EXPENSE and t.category not in excluded
    ]

    monthly_totals = []
    for month in months:
        active = [t for t in expenses if proration.is_active_in_month(t, month)]
        if active:
            monthly_totals.append(sum((proration.monthly_amount(t) for t in active), Decimal(0)))

    if not monthly_totals:
        logger.debug("No expense history before %s; using default savings rate", current_month)
        return fallback

    average_expense = sum(monthly_totals, Decimal(0)) / len(monthly_totals)
    return max(Decimal(0), income - average_expense)


# ---------------------------------------------------------------------------
# Goal projection
# ---------------------------------------------------------------------------


def future_value(principal: float, monthly_savings: float, annual_return_rate: float, months: int) -> float:
    """Value after ``months`` of monthly compounding plus an ordinary annuity.

    ``annual_return_rate`` is a fraction (0.12 for 12%).  Growth too large
    for a float is reported as infinity.
    """
    r = annual_return_rate / 12
    if r == 0:
        return principal + monthly_savings * months
    try:
        growth = (1 + r) ** months
    except OverflowError:
        return float('inf')
    return principal * growth + monthly_savings * (growth - 1) / r


def time_to_goal(
    current_net_worth,
    monthly_savings,
    target,
    annual_return_rate: float,
    *,
    horizon_months: Optional[int] = None,
) -> GoalProjection:
    """Smallest whole number of months until the plan reaches ``target``.

    Args:
        current_net_worth: Starting principal
        monthly_savings: Contribution added at the end of every month
        target: Goal amount
        annual_return_rate: Expected annual return as a fraction
        horizon_months: Upper bound of the search; defaults to
            ``config.GOAL_HORIZON_MONTHS``

    Returns:
        GoalReached(0) when already at or above target, GoalReached(n) for
        the first month the projected value reaches target, otherwise
        GoalUnreachable with ``no_savings`` or ``beyond_horizon``

    Raises:
        ValueError: If the return rate is negative; the search needs a
            non-decreasing future value
    """
    if annual_return_rate < 0:
        raise ValueError(f"Annual return rate must be non-negative, got {annual_return_rate}")
    horizon = config.GOAL_HORIZON_MONTHS if horizon_months is None else horizon_months

    principal = float(current_net_worth)
    savings = float(monthly_savings)
    goal = float(target)

    if principal >= goal:
        return GoalReached(0)
    if savings <= 0:
        return GoalUnreachable(NO_SAVINGS)
    if future_value(principal, savings, annual_return_rate, horizon) < goal:
        logger.debug("Goal %.2f not reached within %d months", goal, horizon)
        return GoalUnreachable(BEYOND_HORIZON)

    low, high = 1, horizon
    while low < high:
        mid = (low + high) // 2
        if future_value(principal, savings, annual_return_rate, mid) >= goal:
            high = mid
        else:
            low = mid + 1
    return GoalReached(low)


def projection_schedule(
    principal: float,
    monthly_savings: float,
    annual_return_rate: float,
    months: int,
) -> pd.DataFrame:
    """Month-by-month projected value of a contribution plan.

    Returns a DataFrame with columns Month, Contributed and Projected_Value,
    starting at month 0.
    """
    n = np.arange(months + 1)
    r = annual_return_rate / 12
    principal = float(principal)
    monthly_savings = float(monthly_savings)
    if r == 0:
        projected = principal + monthly_savings * n
    else:
        growth = np.power(1 + r, n)
        projected = principal * growth + monthly_savings * (growth - 1) / r
    return pd.DataFrame({
        'Month': n,
        'Contributed': principal + monthly_savings * n,
        'Projected_Value': projected,
    })


# ---------------------------------------------------------------------------
# Investment calculators
# ---------------------------------------------------------------------------


def sip_projection(monthly_amount: float, years: float, rate_percent: float) -> InvestmentProjection:
    """Systematic investment plan with contributions at the start of each month."""
    p = float(monthly_amount)
    n = float(years) * 12
    r = float(rate_percent) / 100 / 12
    invested = p * n
    if r == 0 or n == 0:
        return InvestmentProjection(invested=round(invested), future_value=round(invested), returns=0)
    value = p * (((1 + r) ** n - 1) / r) * (1 + r)
    return InvestmentProjection(
        invested=round(invested),
        future_value=round(value),
        returns=round(value - invested),
    )


def lumpsum_projection(amount: float, years: float, rate_percent: float) -> InvestmentProjection:
    p = float(amount)
    value = p * (1 + float(rate_percent) / 100) ** float(years)
    return InvestmentProjection(
        invested=round(p),
        future_value=round(value),
        returns=round(value - p),
    )
