"""Unit tests for finance_engine.trends."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pandas as pd
import pytest

from finance_engine.models import Transaction, TransactionKind
from finance_engine.trends import category_breakdown, daily_spending, monthly_spending

NOW = date(2025, 3, 14)


def _sample_transactions():
    return [
        Transaction(id='1', amount=Decimal('250'), date=date(2025, 3, 14), category='Snacks'),
        Transaction(id='2', amount=Decimal('100'), date=date(2025, 3, 14), category='Groceries'),
        Transaction(id='3', amount=Decimal('1200'), date=date(2025, 1, 20), category='Bills', prorate_months=12),
        Transaction(id='4', amount=Decimal('600'), date=date(2025, 3, 3), category='Bills', prorate_months=3),
        Transaction(id='5', amount=Decimal('5000'), date=date(2025, 3, 10), category='Investments',
                    excluded_from_budget=True),
        Transaction(id='6', amount=Decimal('90000'), date=date(2025, 3, 1), kind=TransactionKind.INCOME),
        Transaction(id='7', amount=Decimal('400'), date=date(2024, 10, 5), category='Travel'),
        Transaction(id='8', amount=Decimal('700'), date=date(2024, 9, 30), category='Shopping'),
    ]


def test_daily_spending_covers_fourteen_days() -> None:
    frame = daily_spending(_sample_transactions(), NOW)

    assert list(frame.columns) == ['date', 'label', 'total']
    assert len(frame) == 14
    assert frame['date'].iloc[0] == pd.Timestamp('2025-03-01')
    assert frame['date'].iloc[-1] == pd.Timestamp('2025-03-14')
    assert frame['label'].iloc[-1] == 'Fri 14'
    assert frame['total'].iloc[-1] == pytest.approx(350)


def test_daily_spending_counts_prorations_in_full_on_their_day() -> None:
    frame = daily_spending(_sample_transactions(), NOW).set_index('date')

    assert frame.loc[pd.Timestamp('2025-03-03'), 'total'] == pytest.approx(600)
    assert frame.loc[pd.Timestamp('2025-03-10'), 'total'] == 0
    assert frame.loc[pd.Timestamp('2025-03-01'), 'total'] == 0


def test_monthly_spending_spreads_prorations() -> None:
    frame = monthly_spending(_sample_transactions(), NOW)

    assert list(frame['label']) == ['Oct', 'Nov', 'Dec', 'Jan', 'Feb', 'Mar']
    assert frame['month'].iloc[0] == pd.Timestamp('2024-10-01')
    assert list(frame['total']) == pytest.approx([400, 0, 0, 100, 100, 650])


def test_category_breakdown_monthly() -> None:
    frame = category_breakdown(_sample_transactions(), NOW)

    assert list(frame.columns) == ['category', 'total']
    assert list(frame['category']) == ['Travel', 'Bills', 'Snacks', 'Groceries']
    assert frame.set_index('category').loc['Bills', 'total'] == pytest.approx(300)
    assert frame['total'].is_monotonic_decreasing


def test_category_breakdown_daily() -> None:
    frame = category_breakdown(_sample_transactions(), NOW, mode='daily')

    assert list(frame['category']) == ['Snacks', 'Bills', 'Groceries']
    assert frame.set_index('category').loc['Bills', 'total'] == pytest.approx(200)


def test_category_breakdown_rejects_unknown_mode() -> None:
    with pytest.raises(ValueError):
        category_breakdown([], NOW, mode='weekly')


def test_category_breakdown_empty() -> None:
    assert category_breakdown([], NOW).empty
