"""Spending trend tables for charts.

Every function returns a pandas DataFrame ordered oldest first (or by
value for the category breakdown).  Only expenses that count towards the
budget are included.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Iterable, List

import pandas as pd

from .models import Transaction, TransactionKind
from .proration import add_months, is_active_in_month, month_index, monthly_amount, proration_span
from .windows import Moment, resolve_anchors

logger = logging.getLogger(__name__)

DAILY_DAYS = 14
MONTHLY_MONTHS = 6


def _budget_expenses(transactions: Iterable[Transaction]) -> List[Transaction]:
    return [
        t for t in transactions
        if t.kind == TransactionKind.EXPENSE and not t.excluded_from_budget
    ]


def daily_spending(transactions: Iterable[Transaction], now: Moment, days: int = DAILY_DAYS) -> pd.DataFrame:
    """Full-amount spend for each of the last ``days`` days, today included.

    Labels read like ``Fri 14``.  Prorated transactions count in full on
    their own date.
    """
    today = resolve_anchors(now).today.date()
    expenses = _budget_expenses(transactions)
    rows = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        total = sum(float(t.amount) for t in expenses if t.date == day)
        rows.append({
            'date': pd.Timestamp(day),
            'label': f"{day:%a} {day.day}",
            'total': total,
        })
    return pd.DataFrame(rows, columns=['date', 'label', 'total'])


def monthly_spending(transactions: Iterable[Transaction], now: Moment, months: int = MONTHLY_MONTHS) -> pd.DataFrame:
    """Monthly-equivalent spend for each of the last ``months`` calendar months.

    Prorated transactions contribute their share to every month they cover.
    """
    current_month = resolve_anchors(now).start_of_month.date()
    expenses = _budget_expenses(transactions)
    rows = []
    for offset in range(months - 1, -1, -1):
        month = add_months(current_month, -offset)
        total = sum(float(monthly_amount(t)) for t in expenses if is_active_in_month(t, month))
        rows.append({
            'month': pd.Timestamp(month),
            'label': f"{month:%b}",
            'total': total,
        })
    return pd.DataFrame(rows, columns=['month', 'label', 'total'])


def _in_breakdown(transaction: Transaction, mode: str, anchors) -> bool:
    if mode == 'daily':
        cutoff = anchors.today.date() - timedelta(days=DAILY_DAYS - 1)
        return transaction.date >= cutoff
    cutoff = add_months(anchors.start_of_month.date(), -(MONTHLY_MONTHS - 1))
    _, last_month = proration_span(transaction)
    return month_index(last_month) >= month_index(cutoff)


def category_breakdown(transactions: Iterable[Transaction], now: Moment, mode: str = 'monthly') -> pd.DataFrame:
    """Per-category monthly-equivalent spend over the trend window.

    Args:
        transactions: Source records
        now: Reference moment
        mode: ``monthly`` covers the last six calendar months,
            ``daily`` the last fourteen days

    Returns:
        DataFrame with columns category and total, zero rows dropped,
        sorted by total descending
    """
    if mode not in ('monthly', 'daily'):
        raise ValueError(f"mode must be 'monthly' or 'daily', got {mode!r}")
    anchors = resolve_anchors(now)
    totals = {}
    for txn in _budget_expenses(transactions):
        if _in_breakdown(txn, mode, anchors):
            totals[txn.category_name] = totals.get(txn.category_name, 0.0) + float(monthly_amount(txn))

    frame = pd.DataFrame(list(totals.items()), columns=['category', 'total'])
    frame = frame[frame['total'] > 0]
    logger.debug("Category breakdown (%s) has %d categories", mode, len(frame))
    return frame.sort_values('total', ascending=False).reset_index(drop=True)
