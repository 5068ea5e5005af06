"""Proration helpers.

A prorated transaction spreads its amount evenly over ``prorate_months``
consecutive calendar months starting with its own month.  All window
checks compare calendar month identity (``year * 12 + month``), never
elapsed days, so boundary months are never off by one.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Tuple

from .models import Transaction


def month_index(d: date) -> int:
    """Return a monotonically increasing integer identifying d's calendar month."""
    return d.year * 12 + (d.month - 1)


def month_start(d: date) -> date:
    return date(d.year, d.month, 1)


def add_months(d: date, n: int) -> date:
    """Return the first day of the month ``n`` months after d's month."""
    index = month_index(d) + n
    return date(index // 12, index % 12 + 1, 1)


def monthly_amount(transaction: Transaction) -> Decimal:
    """Per-month amortized amount of a transaction.

    Example:
        >>> tx = Transaction(id='t1', amount=Decimal('6000'), date=date(2025, 1, 15), prorate_months=6)
        >>> monthly_amount(tx)
        Decimal('1000')
    """
    if transaction.is_prorated:
        return transaction.amount / transaction.prorate_months
    return transaction.amount


def proration_span(transaction: Transaction) -> Tuple[date, date]:
    """First and last covered month (both as day 1) of a transaction."""
    start = month_start(transaction.date)
    months = transaction.prorate_months if transaction.is_prorated else 1
    return start, add_months(start, months - 1)


def covered_months(transaction: Transaction) -> List[date]:
    start, end = proration_span(transaction)
    return [add_months(start, offset) for offset in range(month_index(end) - month_index(start) + 1)]


def is_active_in_month(transaction: Transaction, target_month: date) -> bool:
    """Whether the transaction counts towards the calendar month of ``target_month``.

    Non-prorated transactions are active only in their own month; prorated
    ones in every month of their inclusive span.
    """
    target = month_index(target_month)
    if not transaction.is_prorated:
        return month_index(transaction.date) == target
    start, end = proration_span(transaction)
    return month_index(start) <= target <= month_index(end)
