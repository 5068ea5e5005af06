"""Category aggregation over a filtered window.

Each transaction contributes its monthly-equivalent amount, so a bill of
1200 prorated over 12 months adds 100 to every covered month's totals.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd

from .budgets.categorization import expense_categories, transaction_budget_type
from .filtering import filter_by_window
from .models import (
    UNCATEGORIZED,
    CategoryTotal,
    CategoryTotalsByBudgetType,
    DateRange,
    TimeWindow,
    Transaction,
    TransactionKind,
)
from .proration import monthly_amount
from .windows import Moment

logger = logging.getLogger(__name__)


def _empty_totals() -> Dict[str, CategoryTotal]:
    totals = {name: CategoryTotal() for name in expense_categories()}
    totals[UNCATEGORIZED] = CategoryTotal()
    return totals


def _selected(
    transactions: Iterable[Transaction],
    window: TimeWindow,
    now: Moment,
    *,
    exclude_budget_excluded: bool,
    custom_range: Optional[DateRange],
    spread_prorations: bool,
    kind: Optional[TransactionKind],
) -> List[Transaction]:
    filtered = filter_by_window(
        transactions,
        window,
        now,
        custom_range,
        spread_prorations=spread_prorations,
    )
    return [
        t for t in filtered
        if (kind is None or t.kind == kind)
        and not (exclude_budget_excluded and t.excluded_from_budget)
    ]


def _contribution(transaction: Transaction, spread_prorations: bool) -> Decimal:
    return monthly_amount(transaction) if spread_prorations else transaction.amount


def category_totals(
    transactions: Iterable[Transaction],
    window: TimeWindow,
    now: Moment,
    *,
    exclude_budget_excluded: bool = False,
    custom_range: Optional[DateRange] = None,
    spread_prorations: bool = True,
    kind: Optional[TransactionKind] = TransactionKind.EXPENSE,
) -> Dict[str, CategoryTotal]:
    """Group the transactions of a window by category.

    Args:
        transactions: Source records
        window: Time window to aggregate over
        now: Reference moment for the window
        exclude_budget_excluded: Drop transactions flagged as excluded from budget
        custom_range: Range for the custom window
        spread_prorations: Use monthly-equivalent amounts and month-overlap
            filtering; when False every transaction counts at full amount
        kind: Only aggregate this kind of transaction; None aggregates all

    Returns:
        Mapping of category name to CategoryTotal.  Every configured category
        and ``Uncategorized`` is present even when empty; categories outside
        the configured list get their own bucket.
    """
    totals = _empty_totals()
    selected = _selected(
        transactions,
        window,
        now,
        exclude_budget_excluded=exclude_budget_excluded,
        custom_range=custom_range,
        spread_prorations=spread_prorations,
        kind=kind,
    )
    for txn in selected:
        bucket = totals.setdefault(txn.category_name, CategoryTotal())
        bucket.add(txn, _contribution(txn, spread_prorations))
    logger.debug("Aggregated %d transactions into %d categories", len(selected), len(totals))
    return totals


def category_totals_by_budget_type(
    transactions: Iterable[Transaction],
    window: TimeWindow,
    now: Moment,
    *,
    exclude_budget_excluded: bool = False,
    custom_range: Optional[DateRange] = None,
    spread_prorations: bool = True,
    kind: Optional[TransactionKind] = TransactionKind.EXPENSE,
) -> CategoryTotalsByBudgetType:
    """Same as ``category_totals`` but split into parallel needs/wants maps."""
    result = CategoryTotalsByBudgetType(needs=_empty_totals(), wants=_empty_totals())
    selected = _selected(
        transactions,
        window,
        now,
        exclude_budget_excluded=exclude_budget_excluded,
        custom_range=custom_range,
        spread_prorations=spread_prorations,
        kind=kind,
    )
    for txn in selected:
        bucket = result.bucket(transaction_budget_type(txn))
        bucket.setdefault(txn.category_name, CategoryTotal()).add(
            txn, _contribution(txn, spread_prorations)
        )
    return result


def aggregate(
    transactions: Iterable[Transaction],
    window: TimeWindow,
    now: Moment,
    *,
    exclude_budget_excluded: bool = False,
    custom_range: Optional[DateRange] = None,
    split_by_budget_type: bool = False,
    spread_prorations: bool = True,
    kind: Optional[TransactionKind] = TransactionKind.EXPENSE,
) -> Union[Dict[str, CategoryTotal], CategoryTotalsByBudgetType]:
    options = dict(
        exclude_budget_excluded=exclude_budget_excluded,
        custom_range=custom_range,
        spread_prorations=spread_prorations,
        kind=kind,
    )
    if split_by_budget_type:
        return category_totals_by_budget_type(transactions, window, now, **options)
    return category_totals(transactions, window, now, **options)


def period_total(totals: Dict[str, CategoryTotal]) -> Decimal:
    """Sum of all bucket totals."""
    return sum((bucket.total for bucket in totals.values()), Decimal(0))


def category_totals_frame(totals: Dict[str, CategoryTotal]) -> pd.DataFrame:
    """Tabular view of category totals for presentation.

    Empty buckets are dropped and rows are sorted by spend, largest first.
    """
    columns = ['Total_Spent', 'Transaction_Count', 'Avg_Transaction']
    rows = {
        name: {
            'Total_Spent': float(bucket.total),
            'Transaction_Count': bucket.count,
            'Avg_Transaction': float(bucket.total / bucket.count),
        }
        for name, bucket in totals.items()
        if bucket.count
    }
    if not rows:
        return pd.DataFrame(columns=columns)

    frame = pd.DataFrame.from_dict(rows, orient='index')[columns].round(2)
    frame.index.name = 'Category'
    return frame.sort_values('Total_Spent', ascending=False)
