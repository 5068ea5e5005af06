"""Core record types shared across the engine.

Transactions and asset snapshots are created by the surrounding
application and handed to the engine as immutable inputs.  Everything
here is a frozen dataclass except ``CategoryTotal``, which is filled in
while an aggregation is being built and returned to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from decimal import Decimal
from enum import Enum
from numbers import Integral
from typing import Any, Dict, List, Optional, Tuple

UNCATEGORIZED = 'Uncategorized'


class TransactionKind(str, Enum):
    EXPENSE = 'expense'
    INCOME = 'income'


class BudgetType(str, Enum):
    NEED = 'need'
    WANT = 'want'


class TimeWindow(str, Enum):
    TODAY = 'today'
    WEEK = 'week'
    MONTH = 'month'
    CUSTOM = 'custom'


def to_decimal(value: Any) -> Decimal:
    """Coerce a numeric value to ``Decimal`` without binary float drift.

    ``None`` maps to zero so that partially filled records aggregate
    cleanly.  Floats are routed through ``str`` so ``0.1`` stays ``0.1``.
    """
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Expected a numeric amount, got {value!r}")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(str(value).strip())


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: Decimal
    date: date
    kind: TransactionKind = TransactionKind.EXPENSE
    category: Optional[str] = None
    time: Optional[time] = None          # same-day ordering only
    excluded_from_budget: bool = False
    prorate_months: Optional[int] = None
    budget_type_override: Optional[BudgetType] = None
    merchant: Optional[str] = None
    details: Optional[str] = None

    def __post_init__(self) -> None:
        amount = to_decimal(self.amount)
        if amount < 0:
            raise ValueError(f"Transaction {self.id!r} has negative amount {amount}")
        object.__setattr__(self, 'amount', amount)
        object.__setattr__(self, 'kind', TransactionKind(self.kind))
        if self.budget_type_override is not None:
            object.__setattr__(self, 'budget_type_override', BudgetType(self.budget_type_override))
        if self.prorate_months is not None:
            months = self.prorate_months
            if isinstance(months, bool) or not isinstance(months, Integral) or months < 1:
                raise ValueError(
                    f"Transaction {self.id!r} has invalid prorate_months={self.prorate_months}"
                )
            # a single month is the same as no proration
            object.__setattr__(self, 'prorate_months', int(months) if months > 1 else None)

    @property
    def is_prorated(self) -> bool:
        return self.prorate_months is not None

    @property
    def category_name(self) -> str:
        return self.category or UNCATEGORIZED


@dataclass(frozen=True)
class Investment:
    """One lump contribution into a tracked fund."""

    scheme_code: int
    amount: Decimal
    date: date
    nav_at_purchase: float

    def __post_init__(self) -> None:
        object.__setattr__(self, 'amount', to_decimal(self.amount))
        if self.nav_at_purchase <= 0:
            raise ValueError(
                f"Investment in scheme {self.scheme_code} has non-positive NAV {self.nav_at_purchase}"
            )

    @property
    def units(self) -> float:
        return float(self.amount) / self.nav_at_purchase


@dataclass(frozen=True)
class AssetSnapshot:
    """Per-user holdings; missing asset fields count as zero."""

    bank_savings: Decimal = Decimal(0)
    fixed_deposits: Decimal = Decimal(0)
    mutual_funds: Decimal = Decimal(0)
    ppf: Decimal = Decimal(0)
    epf: Decimal = Decimal(0)
    monthly_income: Optional[Decimal] = None
    needs_budget: Optional[Decimal] = None
    wants_budget: Optional[Decimal] = None
    investments: Tuple[Investment, ...] = ()

    def __post_init__(self) -> None:
        for name in ('bank_savings', 'fixed_deposits', 'mutual_funds', 'ppf', 'epf'):
            object.__setattr__(self, name, to_decimal(getattr(self, name)))
        for name in ('monthly_income', 'needs_budget', 'wants_budget'):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, to_decimal(value))
        object.__setattr__(self, 'investments', tuple(self.investments or ()))


@dataclass(frozen=True)
class DateRange:
    """Inclusive custom date range."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(f"Date range starts after it ends: {self.start} > {self.end}")


@dataclass
class CategoryTotal:
    total: Decimal = Decimal(0)
    count: int = 0
    transactions: List[Transaction] = field(default_factory=list)

    def add(self, transaction: Transaction, amount: Decimal) -> None:
        self.total += amount
        self.count += 1
        self.transactions.append(transaction)


@dataclass
class CategoryTotalsByBudgetType:
    needs: Dict[str, CategoryTotal] = field(default_factory=dict)
    wants: Dict[str, CategoryTotal] = field(default_factory=dict)

    def bucket(self, budget_type: BudgetType) -> Dict[str, CategoryTotal]:
        return self.needs if budget_type == BudgetType.NEED else self.wants
