"""Select and order transactions against a calendar window."""

from __future__ import annotations

from datetime import datetime, time
from typing import Iterable, List, Optional

from .models import DateRange, TimeWindow, Transaction
from .proration import is_active_in_month
from .windows import Moment, custom_bounds, resolve_anchors, window_start


def _occurred_at(transaction: Transaction) -> datetime:
    return datetime.combine(transaction.date, time.min)


def filter_by_window(
    transactions: Iterable[Transaction],
    window: TimeWindow,
    now: Moment,
    custom_range: Optional[DateRange] = None,
    *,
    spread_prorations: bool = True,
) -> List[Transaction]:
    """Return the transactions that fall inside a window, preserving input order.

    Args:
        transactions: Records to filter
        window: One of today/week/month/custom
        now: Reference moment for resolving the window anchors
        custom_range: Inclusive range used when ``window`` is custom; without
            it the custom window includes everything
        spread_prorations: When True, the month window includes prorated
            transactions whose span covers the current month even if they
            were dated in an earlier month

    Returns:
        List of matching transactions

    Proration overlap is evaluated only for the month window.  Today, week
    and custom ranges test the transaction's own date.
    """
    window = TimeWindow(window)
    anchors = resolve_anchors(now)

    if window == TimeWindow.CUSTOM:
        if custom_range is None:
            return list(transactions)
        start, end = custom_bounds(custom_range)
        return [t for t in transactions if start <= _occurred_at(t) <= end]

    lower = window_start(window, anchors)
    selected: List[Transaction] = []
    for txn in transactions:
        if spread_prorations and window == TimeWindow.MONTH and txn.is_prorated:
            if is_active_in_month(txn, anchors.start_of_month):
                selected.append(txn)
            continue
        if _occurred_at(txn) >= lower:
            selected.append(txn)
    return selected


def sort_transactions(
    transactions: Iterable[Transaction],
    sort_by: str = 'date',
    order: str = 'desc',
) -> List[Transaction]:
    """Sort by date (clock time breaks same-day ties) or by amount.

    Records without a clock time sort as midnight of their day.
    """
    if sort_by not in ('date', 'amount'):
        raise ValueError(f"Unsupported sort key '{sort_by}'")
    if order not in ('asc', 'desc'):
        raise ValueError(f"Unsupported sort order '{order}'")

    reverse = order == 'desc'
    if sort_by == 'amount':
        return sorted(transactions, key=lambda t: t.amount, reverse=reverse)
    return sorted(transactions, key=lambda t: (t.date, t.time or time.min), reverse=reverse)
