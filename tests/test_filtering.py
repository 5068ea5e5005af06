"""Unit tests for finance_engine.filtering."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal

import pytest

from finance_engine.filtering import filter_by_window, sort_transactions
from finance_engine.models import DateRange, TimeWindow, Transaction

NOW = datetime(2025, 3, 14, 12, 0)  # Friday


def _txn(txn_id, on, amount='100', **kwargs) -> Transaction:
    return Transaction(id=txn_id, amount=Decimal(amount), date=on, **kwargs)


def _ids(transactions):
    return [t.id for t in transactions]


def test_today_window() -> None:
    rows = [_txn('today', date(2025, 3, 14)), _txn('yesterday', date(2025, 3, 13))]

    assert _ids(filter_by_window(rows, TimeWindow.TODAY, NOW)) == ['today']


def test_week_window_starts_monday() -> None:
    rows = [_txn('monday', date(2025, 3, 10)), _txn('sunday', date(2025, 3, 9))]

    assert _ids(filter_by_window(rows, 'week', NOW)) == ['monday']


def test_month_window_includes_covering_prorations() -> None:
    rows = [
        _txn('first', date(2025, 3, 1)),
        _txn('feb', date(2025, 2, 28)),
        _txn('insurance', date(2025, 1, 10), '6000', prorate_months=6),
        _txn('expired', date(2024, 10, 5), '3000', prorate_months=3),
    ]

    assert _ids(filter_by_window(rows, TimeWindow.MONTH, NOW)) == ['first', 'insurance']


def test_month_window_without_spreading_uses_origin_date() -> None:
    rows = [
        _txn('first', date(2025, 3, 1)),
        _txn('insurance', date(2025, 1, 10), '6000', prorate_months=6),
    ]

    result = filter_by_window(rows, TimeWindow.MONTH, NOW, spread_prorations=False)

    assert _ids(result) == ['first']


def test_prorations_do_not_spread_into_week_window() -> None:
    rows = [_txn('insurance', date(2025, 1, 10), '6000', prorate_months=6)]

    assert filter_by_window(rows, TimeWindow.WEEK, NOW) == []


def test_custom_range_is_inclusive() -> None:
    rows = [
        _txn('start', date(2025, 3, 1)),
        _txn('end', date(2025, 3, 5)),
        _txn('after', date(2025, 3, 6)),
        _txn('before', date(2025, 2, 28)),
    ]
    window = DateRange(date(2025, 3, 1), date(2025, 3, 5))

    assert _ids(filter_by_window(rows, TimeWindow.CUSTOM, NOW, window)) == ['start', 'end']


def test_custom_without_range_keeps_everything() -> None:
    rows = [_txn('a', date(2020, 1, 1)), _txn('b', date(2030, 1, 1))]

    assert _ids(filter_by_window(rows, TimeWindow.CUSTOM, NOW)) == ['a', 'b']


def test_filter_preserves_input_order() -> None:
    rows = [_txn('late', date(2025, 3, 12)), _txn('early', date(2025, 3, 10))]

    assert _ids(filter_by_window(rows, TimeWindow.WEEK, NOW)) == ['late', 'early']


def test_sort_by_date_breaks_ties_on_time() -> None:
    rows = [
        _txn('morning', date(2025, 3, 10), time=time(9, 0)),
        _txn('older', date(2025, 3, 9), time=time(23, 0)),
        _txn('evening', date(2025, 3, 10), time=time(20, 0)),
        _txn('untimed', date(2025, 3, 10)),
    ]

    assert _ids(sort_transactions(rows)) == ['evening', 'morning', 'untimed', 'older']
    assert _ids(sort_transactions(rows, order='asc')) == ['older', 'untimed', 'morning', 'evening']


def test_sort_by_amount() -> None:
    rows = [_txn('mid', date(2025, 3, 1), '50'), _txn('big', date(2025, 3, 2), '500'), _txn('small', date(2025, 3, 3), '5')]

    assert _ids(sort_transactions(rows, 'amount', 'asc')) == ['small', 'mid', 'big']
    assert _ids(sort_transactions(rows, 'amount')) == ['big', 'mid', 'small']


def test_sort_rejects_unknown_options() -> None:
    with pytest.raises(ValueError):
        sort_transactions([], sort_by='merchant')
    with pytest.raises(ValueError):
        sort_transactions([], order='sideways')
