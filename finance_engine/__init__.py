"""Top-level package for the finance engine.

Pure aggregation and projection logic for a personal finance tracker.
The primary modules are:

* ``windows`` and ``filtering`` - calendar windows and transaction selection
* ``proration`` - spreading one payment over several calendar months
* ``aggregation`` - per-category totals, optionally split into needs/wants
* ``budgets`` - monthly budget status and need/want classification
* ``projection`` - net worth, savings estimate and time-to-goal
* ``instruments`` - fixed deposit and mutual fund return calculators
* ``trends`` - daily and monthly spending tables for charts
* ``data_processing`` - conversion between stored rows and engine models

Nothing here performs I/O beyond reading the bundled JSON settings; the
caller supplies the current moment, transactions and price histories.
"""

from . import aggregation  # noqa: F401  # re-exported for convenience
from . import budgets  # noqa: F401
from . import data_processing  # noqa: F401
from . import filtering  # noqa: F401
from . import instruments  # noqa: F401
from . import projection  # noqa: F401
from . import proration  # noqa: F401
from . import trends  # noqa: F401
from . import windows  # noqa: F401
from .models import (  # noqa: F401
    AssetSnapshot,
    BudgetType,
    CategoryTotal,
    CategoryTotalsByBudgetType,
    DateRange,
    Investment,
    TimeWindow,
    Transaction,
    TransactionKind,
)

__version__ = "0.1.0"

__all__ = [
    "aggregation",
    "budgets",
    "data_processing",
    "filtering",
    "instruments",
    "projection",
    "proration",
    "trends",
    "windows",
    "AssetSnapshot",
    "BudgetType",
    "CategoryTotal",
    "CategoryTotalsByBudgetType",
    "DateRange",
    "Investment",
    "TimeWindow",
    "Transaction",
    "TransactionKind",
]
