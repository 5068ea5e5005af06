"""Calendar window anchors for the today/week/month/custom filters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple, Union

from .models import DateRange, TimeWindow

Moment = Union[date, datetime]


@dataclass(frozen=True)
class WindowAnchors:
    now: datetime
    today: datetime
    start_of_week: datetime
    start_of_month: datetime


def as_datetime(value: Moment) -> datetime:
    """Normalize a ``date`` or ``datetime`` to a naive ``datetime``."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def resolve_anchors(now: Moment) -> WindowAnchors:
    """Compute the inclusive lower bounds for the built-in windows.

    Weeks always start on Monday regardless of locale.
    """
    current = as_datetime(now)
    today = datetime.combine(current.date(), time.min)
    start_of_week = today - timedelta(days=today.weekday())
    start_of_month = today.replace(day=1)
    return WindowAnchors(
        now=current,
        today=today,
        start_of_week=start_of_week,
        start_of_month=start_of_month,
    )


def custom_bounds(date_range: DateRange) -> Tuple[datetime, datetime]:
    """Return (start, end) with the end pushed to the last instant of its day."""
    return (
        datetime.combine(date_range.start, time.min),
        datetime.combine(date_range.end, time.max),
    )


def window_start(window: TimeWindow, anchors: WindowAnchors) -> Optional[datetime]:
    window = TimeWindow(window)
    if window == TimeWindow.TODAY:
        return anchors.today
    if window == TimeWindow.WEEK:
        return anchors.start_of_week
    if window == TimeWindow.MONTH:
        return anchors.start_of_month
    return None
