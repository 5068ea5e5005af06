"""Unit tests for finance_engine.aggregation."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from finance_engine.aggregation import (
    aggregate,
    category_totals,
    category_totals_by_budget_type,
    category_totals_frame,
    period_total,
)
from finance_engine.budgets import expense_categories
from finance_engine.filtering import filter_by_window
from finance_engine.models import (
    UNCATEGORIZED,
    BudgetType,
    CategoryTotalsByBudgetType,
    TimeWindow,
    Transaction,
    TransactionKind,
)
from finance_engine.proration import monthly_amount

NOW = datetime(2025, 3, 14, 12, 0)


def _sample_transactions():
    return [
        Transaction(id='1', amount=Decimal('450'), date=date(2025, 3, 2), category='Groceries'),
        Transaction(id='2', amount=Decimal('120.50'), date=date(2025, 3, 5), category='Snacks'),
        Transaction(id='3', amount=Decimal('1200'), date=date(2025, 1, 20), category='Bills', prorate_months=12),
        Transaction(id='4', amount=Decimal('80'), date=date(2025, 3, 8)),
        Transaction(id='5', amount=Decimal('300'), date=date(2025, 3, 9), category='Pets'),
        Transaction(id='6', amount=Decimal('5000'), date=date(2025, 3, 10), category='Investments',
                    excluded_from_budget=True),
        Transaction(id='7', amount=Decimal('90000'), date=date(2025, 3, 1), kind=TransactionKind.INCOME,
                    category='Salary'),
        Transaction(id='8', amount=Decimal('75'), date=date(2025, 2, 27), category='Groceries'),
    ]


def test_every_configured_category_is_present() -> None:
    totals = category_totals([], TimeWindow.MONTH, NOW)

    for name in expense_categories():
        assert name in totals
        assert totals[name].total == 0
        assert totals[name].count == 0
    assert UNCATEGORIZED in totals


def test_category_totals_for_month() -> None:
    totals = category_totals(_sample_transactions(), TimeWindow.MONTH, NOW)

    assert totals['Groceries'].total == Decimal('450')
    assert totals['Snacks'].total == Decimal('120.50')
    assert totals['Bills'].total == Decimal('100')
    assert totals[UNCATEGORIZED].total == Decimal('80')
    assert totals['Pets'].total == Decimal('300')
    assert totals['Investments'].count == 1
    assert 'Salary' not in totals


def test_totals_account_for_every_filtered_transaction() -> None:
    transactions = _sample_transactions()
    totals = category_totals(transactions, TimeWindow.MONTH, NOW)

    filtered = [
        t for t in filter_by_window(transactions, TimeWindow.MONTH, NOW)
        if t.kind == TransactionKind.EXPENSE
    ]
    expected = sum((monthly_amount(t) for t in filtered), Decimal(0))

    assert period_total(totals) == expected
    assert sum(bucket.count for bucket in totals.values()) == len(filtered)


def test_exclude_budget_excluded() -> None:
    totals = category_totals(_sample_transactions(), TimeWindow.MONTH, NOW, exclude_budget_excluded=True)

    assert totals['Investments'].count == 0
    assert period_total(totals) == Decimal('1050.50')


def test_without_spreading_prorated_bill_counts_in_origin_month_only() -> None:
    march = category_totals(_sample_transactions(), TimeWindow.MONTH, NOW, spread_prorations=False)
    january = category_totals(
        _sample_transactions(), TimeWindow.MONTH, datetime(2025, 1, 25), spread_prorations=False
    )

    assert march['Bills'].count == 0
    assert january['Bills'].total == Decimal('1200')


def test_kind_none_aggregates_income_too() -> None:
    totals = category_totals(_sample_transactions(), TimeWindow.MONTH, NOW, kind=None)

    assert totals['Salary'].total == Decimal('90000')


def test_split_by_budget_type() -> None:
    transactions = _sample_transactions() + [
        Transaction(id='9', amount=Decimal('40'), date=date(2025, 3, 11), category='Groceries',
                    budget_type_override=BudgetType.WANT),
    ]

    result = category_totals_by_budget_type(transactions, TimeWindow.MONTH, NOW)

    assert result.needs['Groceries'].total == Decimal('450')
    assert result.wants['Groceries'].total == Decimal('40')
    assert result.needs['Bills'].total == Decimal('100')
    assert result.wants['Snacks'].total == Decimal('120.50')
    assert result.wants['Pets'].total == Decimal('300')
    assert result.wants[UNCATEGORIZED].total == Decimal('80')
    for name in expense_categories():
        assert name in result.needs and name in result.wants


def test_aggregate_dispatches_on_split_flag() -> None:
    flat = aggregate(_sample_transactions(), TimeWindow.WEEK, NOW)
    split = aggregate(_sample_transactions(), TimeWindow.WEEK, NOW, split_by_budget_type=True)

    assert isinstance(split, CategoryTotalsByBudgetType)
    assert flat['Investments'].total == Decimal('5000')
    assert period_total(flat) == period_total(split.needs) + period_total(split.wants)


def test_category_totals_frame_sorted_and_compact() -> None:
    frame = category_totals_frame(category_totals(_sample_transactions(), TimeWindow.MONTH, NOW))

    assert list(frame.columns) == ['Total_Spent', 'Transaction_Count', 'Avg_Transaction']
    assert frame.index.name == 'Category'
    assert frame.index[0] == 'Investments'
    assert frame['Total_Spent'].is_monotonic_decreasing
    assert 'Meals' not in frame.index
    assert frame.loc['Snacks', 'Avg_Transaction'] == 120.5


def test_category_totals_frame_empty() -> None:
    frame = category_totals_frame(category_totals([], TimeWindow.MONTH, NOW))

    assert frame.empty
