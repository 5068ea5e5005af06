"""Fixed deposit compound-interest calculations.

Values follow ``A = P * (1 + r/k) ** (k * t)`` where ``t`` is measured as
exact day differences over a 365.25-day year.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from ..config import DAYS_PER_YEAR
from ..settings import get_config_value
from ..windows import Moment, as_datetime


@dataclass(frozen=True)
class FixedDepositConfig:
    bank: str
    rate: float                 # annual interest rate in %
    start_date: date
    maturity_date: date
    compounding_frequency: int = 4

    def __post_init__(self) -> None:
        if self.compounding_frequency <= 0:
            raise ValueError(
                f"{self.bank}: compounding frequency must be positive, got {self.compounding_frequency}"
            )
        if self.maturity_date < self.start_date:
            raise ValueError(f"{self.bank}: maturity date {self.maturity_date} precedes start {self.start_date}")


@dataclass(frozen=True)
class FDCalculation:
    bank: str
    rate: float
    principal: float
    current_value: float
    maturity_value: float
    interest_earned: float
    total_interest: float
    years_elapsed: float
    total_tenure: float
    start_date: date
    maturity_date: date


def load_fd_configs() -> List[FixedDepositConfig]:
    """Fixed deposits configured in the engine settings."""
    return [
        FixedDepositConfig(
            bank=entry['bank'],
            rate=float(entry['rate']),
            start_date=date.fromisoformat(entry['start_date']),
            maturity_date=date.fromisoformat(entry['maturity_date']),
            compounding_frequency=int(entry.get('compounding_frequency', 4)),
        )
        for entry in get_config_value('engine', 'fixed_deposits', default=[])
    ]


def compound_value(principal: float, rate_percent: float, frequency: int, years: float) -> float:
    r = rate_percent / 100
    return principal * (1 + r / frequency) ** (frequency * years)


def years_between(start: date, end: date) -> float:
    return (end - start).days / DAYS_PER_YEAR


def calculate_fd(principal: float, fd: FixedDepositConfig, now: Moment) -> FDCalculation:
    """Current and maturity value of one deposit.

    Elapsed time is clamped to zero before the start date and to the
    tenure after maturity, so the current value stops growing at maturity.
    """
    principal = float(principal)
    today = as_datetime(now).date()
    years_elapsed = max(0.0, years_between(fd.start_date, today))
    total_tenure = years_between(fd.start_date, fd.maturity_date)

    current_value = compound_value(
        principal, fd.rate, fd.compounding_frequency, min(years_elapsed, total_tenure)
    )
    maturity_value = compound_value(principal, fd.rate, fd.compounding_frequency, total_tenure)

    return FDCalculation(
        bank=fd.bank,
        rate=fd.rate,
        principal=principal,
        current_value=current_value,
        maturity_value=maturity_value,
        interest_earned=current_value - principal,
        total_interest=maturity_value - principal,
        years_elapsed=years_elapsed,
        total_tenure=total_tenure,
        start_date=fd.start_date,
        maturity_date=fd.maturity_date,
    )


def calculate_fd_values(
    principal: float,
    now: Moment,
    configs: Optional[Sequence[FixedDepositConfig]] = None,
) -> List[FDCalculation]:
    if not principal:
        return []
    deposits = load_fd_configs() if configs is None else configs
    return [calculate_fd(principal, fd, now) for fd in deposits]


def current_fd_value(
    principal: float,
    now: Moment,
    configs: Optional[Sequence[FixedDepositConfig]] = None,
) -> float:
    """Total accrued value across the configured deposits."""
    return sum((fd.current_value for fd in calculate_fd_values(principal, now, configs)), 0.0)
