"""Mutual fund NAV returns and portfolio valuation.

NAV histories arrive most-recent-first from the public price feed and are
used in that order; nothing here re-sorts them.  Lookups return the entry
with the greatest date at or before a target and never interpolate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from ..models import Investment
from ..settings import get_config_value
from ..windows import Moment, as_datetime

logger = logging.getLogger(__name__)

NAV_DATE_FORMAT = '%d-%m-%Y'


@dataclass(frozen=True)
class NavPoint:
    date: date
    nav: float


@dataclass(frozen=True)
class WatchlistFund:
    scheme_code: int
    short_name: str
    full_name: str


@dataclass(frozen=True)
class PeriodReturn:
    change: float
    change_percent: float
    annualized: bool = False


@dataclass(frozen=True)
class FundStats:
    current_nav: float
    previous_nav: Optional[float]
    last_updated: date
    daily: Optional[PeriodReturn]
    monthly: Optional[PeriodReturn]
    one_year: Optional[PeriodReturn]
    three_year: Optional[PeriodReturn]
    five_year: Optional[PeriodReturn]
    scheme_code: Optional[int] = None


@dataclass(frozen=True)
class PortfolioValue:
    invested: float
    current: float
    net_change: float
    daily_change: float


def load_watchlist() -> List[WatchlistFund]:
    return [
        WatchlistFund(
            scheme_code=int(entry['scheme_code']),
            short_name=entry['short_name'],
            full_name=entry['full_name'],
        )
        for entry in get_config_value('engine', 'watchlist', default=[])
    ]


def parse_nav_history(records: Iterable[Mapping[str, Any]]) -> List[NavPoint]:
    """Convert raw feed rows (``{"date": "DD-MM-YYYY", "nav": "12.3"}``) to NavPoints.

    Rows whose date or NAV cannot be parsed are dropped.  Feed order is kept.
    """
    frame = pd.DataFrame(list(records), columns=['date', 'nav'])
    if frame.empty:
        return []
    dates = pd.to_datetime(frame['date'], format=NAV_DATE_FORMAT, errors='coerce')
    navs = pd.to_numeric(frame['nav'], errors='coerce')
    valid = dates.notna() & navs.notna()
    if not valid.all():
        logger.warning("Dropped %d unparseable NAV rows", int((~valid).sum()))
    return [
        NavPoint(date=ts.date(), nav=float(nav))
        for ts, nav in zip(dates[valid], navs[valid])
    ]


def nav_on_or_before(history: Sequence[NavPoint], target: date) -> Optional[NavPoint]:
    """Most recent history entry dated at or before ``target``."""
    for point in history:
        if point.date <= target:
            return point
    return None


def _lookback(today: date, **offset: int) -> date:
    return (pd.Timestamp(today) - pd.DateOffset(**offset)).date()


def simple_return(current: float, past: Optional[float]) -> Optional[PeriodReturn]:
    if past is None or past <= 0:
        return None
    change = current - past
    return PeriodReturn(change=change, change_percent=change / past * 100)


def cagr_return(current: float, past: Optional[float], years: int) -> Optional[PeriodReturn]:
    """Compound annual growth rate, ``(current / past) ** (1 / years) - 1``, as a percentage."""
    if past is None or past <= 0:
        return None
    rate = (current / past) ** (1 / years) - 1
    return PeriodReturn(change=current - past, change_percent=rate * 100, annualized=True)


def calculate_fund_stats(
    history: Sequence[NavPoint],
    today: Moment,
    *,
    scheme_code: Optional[int] = None,
) -> FundStats:
    """Daily, monthly and one-year simple returns plus three- and five-year CAGR.

    Args:
        history: NAV points sorted most recent first
        today: Reference date for the lookback windows
        scheme_code: Optional identifier carried through to the result

    Returns:
        FundStats where any period without a NAV at or before its lookback
        date is None rather than zero

    Raises:
        ValueError: If the history is empty
    """
    if not history:
        raise ValueError(f"NAV history for scheme {scheme_code} is empty")

    reference = as_datetime(today).date()
    current = history[0]
    previous = history[1] if len(history) > 1 else None

    def nav_back(**offset: int) -> Optional[float]:
        target = _lookback(reference, **offset)
        point = nav_on_or_before(history, target)
        if point is None:
            logger.debug("No NAV on or before %s for scheme %s", target, scheme_code)
            return None
        return point.nav

    return FundStats(
        current_nav=current.nav,
        previous_nav=previous.nav if previous else None,
        last_updated=current.date,
        daily=simple_return(current.nav, previous.nav if previous else None),
        monthly=simple_return(current.nav, nav_back(months=1)),
        one_year=simple_return(current.nav, nav_back(years=1)),
        three_year=cagr_return(current.nav, nav_back(years=3), 3),
        five_year=cagr_return(current.nav, nav_back(years=5), 5),
        scheme_code=scheme_code,
    )


def portfolio_value(
    investments: Iterable[Investment],
    stats_by_scheme: Mapping[int, FundStats],
) -> Optional[PortfolioValue]:
    """Live value of the tracked investments (units times current NAV).

    Investments in schemes without stats are skipped.  Returns None when
    nothing priced is held.
    """
    invested = 0.0
    current = 0.0
    daily_change = 0.0
    for investment in investments:
        stats = stats_by_scheme.get(investment.scheme_code)
        if stats is None:
            continue
        value = investment.units * stats.current_nav
        previous_nav = stats.previous_nav if stats.previous_nav is not None else stats.current_nav
        invested += float(investment.amount)
        current += value
        daily_change += value - investment.units * previous_nav

    if current == 0:
        return None
    return PortfolioValue(
        invested=invested,
        current=current,
        net_change=current - invested,
        daily_change=daily_change,
    )


def recent_nav_series(history: Sequence[NavPoint], days: int = 30) -> pd.Series:
    """The latest ``days`` NAV points in ascending date order, for sparklines."""
    recent = list(history[:days])[::-1]
    return pd.Series(
        [point.nav for point in recent],
        index=pd.DatetimeIndex([point.date for point in recent], name='date'),
        name='nav',
        dtype=float,
    )


def stats_by_scheme(histories: Mapping[int, Sequence[NavPoint]], today: Moment) -> Dict[int, FundStats]:
    """Compute FundStats for every scheme with a non-empty history."""
    return {
        code: calculate_fund_stats(history, today, scheme_code=code)
        for code, history in histories.items()
        if history
    }
