"""Unit tests for finance_engine.windows."""

from __future__ import annotations

from datetime import date, datetime, time

import pytest

from finance_engine.models import DateRange, TimeWindow
from finance_engine.windows import as_datetime, custom_bounds, resolve_anchors, window_start


def test_anchors_for_mid_week_moment() -> None:
    anchors = resolve_anchors(datetime(2025, 3, 14, 15, 30))  # Friday

    assert anchors.today == datetime(2025, 3, 14)
    assert anchors.start_of_week == datetime(2025, 3, 10)
    assert anchors.start_of_month == datetime(2025, 3, 1)


def test_week_starts_on_monday_even_on_sunday() -> None:
    anchors = resolve_anchors(date(2025, 3, 16))  # Sunday

    assert anchors.start_of_week == datetime(2025, 3, 10)


def test_week_can_start_in_previous_month() -> None:
    anchors = resolve_anchors(date(2025, 3, 2))

    assert anchors.start_of_week == datetime(2025, 2, 24)
    assert anchors.start_of_month == datetime(2025, 3, 1)


def test_as_datetime_keeps_datetimes() -> None:
    moment = datetime(2025, 1, 1, 8, 0)
    assert as_datetime(moment) is moment
    assert as_datetime(date(2025, 1, 1)) == datetime(2025, 1, 1, 0, 0)


def test_custom_bounds_cover_whole_end_day() -> None:
    start, end = custom_bounds(DateRange(date(2025, 3, 1), date(2025, 3, 5)))

    assert start == datetime(2025, 3, 1, 0, 0)
    assert end == datetime.combine(date(2025, 3, 5), time.max)


def test_window_start_for_each_window() -> None:
    anchors = resolve_anchors(datetime(2025, 3, 14, 9, 0))

    assert window_start(TimeWindow.TODAY, anchors) == anchors.today
    assert window_start('week', anchors) == anchors.start_of_week
    assert window_start(TimeWindow.MONTH, anchors) == anchors.start_of_month
    assert window_start(TimeWindow.CUSTOM, anchors) is None


def test_unknown_window_name_is_rejected() -> None:
    with pytest.raises(ValueError):
        window_start('year', resolve_anchors(date(2025, 3, 14)))


def test_inverted_date_range_is_rejected() -> None:
    with pytest.raises(ValueError):
        DateRange(date(2025, 3, 5), date(2025, 3, 1))
