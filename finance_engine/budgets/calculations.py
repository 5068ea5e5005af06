"""Budget calculation utilities.

This module derives the daily allowance, remaining budget and percentage
consumed for the current month, both for a single monthly ceiling and for
the separate needs/wants budgets.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from .. import config
from ..models import BudgetType, Transaction, TransactionKind, to_decimal
from ..proration import is_active_in_month, monthly_amount
from ..windows import Moment, resolve_anchors
from .categorization import transaction_budget_type

_HUNDRED = Decimal(100)


@dataclass(frozen=True)
class BudgetInfo:
    daily_allowance: Decimal
    remaining: Decimal
    percent_used: Decimal
    days_remaining: int


@dataclass(frozen=True)
class BudgetTypeInfo:
    needs_spent: Decimal
    wants_spent: Decimal
    needs_budget: Decimal
    wants_budget: Decimal
    needs_remaining: Decimal
    wants_remaining: Decimal
    needs_percent: Decimal
    wants_percent: Decimal
    total_percent: Decimal


def days_remaining_in_month(now: Moment) -> int:
    """Days from today through the last day of the month, inclusive."""
    today = resolve_anchors(now).today
    last_day = calendar.monthrange(today.year, today.month)[1]
    return last_day - today.day + 1


def _percent(spent: Decimal, budget: Decimal) -> Decimal:
    return spent / budget * _HUNDRED if budget > 0 else Decimal(0)


def budget_info(
    period_total,
    monthly_ceiling=None,
    *,
    now: Moment,
) -> BudgetInfo:
    """Calculate budget status for the current month.

    Args:
        period_total: Amount spent so far in the period
        monthly_ceiling: Monthly budget; defaults to ``config.MONTHLY_BUDGET``
        now: Reference moment

    Returns:
        BudgetInfo where ``remaining`` never goes below zero and
        ``percent_used`` is left unclamped so overspend shows as > 100

    Example:
        >>> info = budget_info(Decimal('18000'), Decimal('15000'), now=date(2025, 6, 20))
        >>> info.remaining, info.percent_used, info.days_remaining
        (Decimal('0'), Decimal('120.0'), 11)
    """
    spent = to_decimal(period_total)
    ceiling = config.MONTHLY_BUDGET if monthly_ceiling is None else to_decimal(monthly_ceiling)
    if ceiling < 0:
        raise ValueError(f"Monthly budget must be non-negative, got {ceiling}")

    remaining = max(Decimal(0), ceiling - spent)
    days_left = days_remaining_in_month(now)
    daily_allowance = remaining / days_left if days_left > 0 else Decimal(0)

    return BudgetInfo(
        daily_allowance=daily_allowance,
        remaining=remaining,
        percent_used=_percent(spent, ceiling),
        days_remaining=days_left,
    )


def budget_type_info(
    transactions: Iterable[Transaction],
    now: Moment,
    needs_budget=None,
    wants_budget=None,
) -> BudgetTypeInfo:
    """Calculate current-month spending against the needs and wants budgets.

    Only budget-included expenses count.  Prorated expenses contribute their
    monthly amount when their span covers the current month.
    """
    start_of_month = resolve_anchors(now).start_of_month
    needs_limit = config.DEFAULT_NEEDS_BUDGET if needs_budget is None else to_decimal(needs_budget)
    wants_limit = config.DEFAULT_WANTS_BUDGET if wants_budget is None else to_decimal(wants_budget)

    needs_spent = Decimal(0)
    wants_spent = Decimal(0)
    for txn in transactions:
        if txn.excluded_from_budget or txn.kind != TransactionKind.EXPENSE:
            continue
        if txn.is_prorated:
            if not is_active_in_month(txn, start_of_month):
                continue
        elif txn.date < start_of_month.date():
            continue

        if transaction_budget_type(txn) == BudgetType.NEED:
            needs_spent += monthly_amount(txn)
        else:
            wants_spent += monthly_amount(txn)

    return BudgetTypeInfo(
        needs_spent=needs_spent,
        wants_spent=wants_spent,
        needs_budget=needs_limit,
        wants_budget=wants_limit,
        needs_remaining=max(Decimal(0), needs_limit - needs_spent),
        wants_remaining=max(Decimal(0), wants_limit - wants_spent),
        needs_percent=_percent(needs_spent, needs_limit),
        wants_percent=_percent(wants_spent, wants_limit),
        total_percent=_percent(needs_spent + wants_spent, needs_limit + wants_limit),
    )
