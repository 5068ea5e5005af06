"""Conversion between stored records and engine models.

This module contains pure functions that turn persisted rows (plain
mappings or pandas DataFrames using the snake_case storage schema) into
``Transaction``, ``Investment`` and ``AssetSnapshot`` objects, and back
into DataFrames for analysis.  They do not talk to any database so that
they can be unit tested and reused by whichever service owns storage.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Any, Iterable, List, Mapping, Optional

import numpy as np
import pandas as pd

from .models import AssetSnapshot, Investment, Transaction, TransactionKind
from .proration import monthly_amount

logger = logging.getLogger(__name__)

TRANSACTION_COLUMNS = [
    'id',
    'date',
    'time',
    'type',
    'amount',
    'category',
    'merchant',
    'details',
    'excluded_from_budget',
    'prorate_months',
    'budget_type',
]

ASSET_FIELDS = ['bank_savings', 'fixed_deposits', 'mutual_funds', 'ppf', 'epf']

# ---------------------------------------------------------------------------
# Scalar coercion
# ---------------------------------------------------------------------------


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _clean_string(value: Any) -> Optional[str]:
    if _is_missing(value):
        return None
    return str(value).strip()


def _parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if _is_missing(value):
        raise ValueError("Record is missing its date")
    return datetime.strptime(str(value).strip()[:10], '%Y-%m-%d').date()


def _parse_time(value: Any) -> Optional[time]:
    if _is_missing(value):
        return None
    if isinstance(value, time):
        return value
    text = str(value).strip()
    for fmt in ('%H:%M:%S', '%H:%M'):
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    logger.warning("Ignoring unparseable time %r", value)
    return None


def _optional_int(value: Any) -> Optional[int]:
    """Whole-number field; fractional values are rejected rather than truncated."""
    if _is_missing(value):
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Expected a whole number, got {value!r}")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    return value


_TRUE_FLAGS = {'true', '1', 'yes', 't', 'y'}
_FALSE_FLAGS = {'false', '0', 'no', 'f', 'n', ''}


def _parse_flag(value: Any) -> bool:
    """Boolean column as stored by CSV, sqlite or a DataFrame."""
    if value is None:
        return False
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_FLAGS:
            return True
        if text in _FALSE_FLAGS:
            return False
        raise ValueError(f"Unrecognised boolean flag {value!r}")
    if _is_missing(value):
        return False
    if isinstance(value, (bool, int)) and value in (0, 1):
        return bool(value)
    if isinstance(value, float) and value in (0.0, 1.0):
        return bool(value)
    raise ValueError(f"Unrecognised boolean flag {value!r}")


def _number(value: Any) -> Any:
    """Numeric field with null or missing coerced to zero."""
    if _is_missing(value):
        return 0
    if isinstance(value, np.generic):
        return value.item()
    return value


def _coerce_scalar(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    if value is pd.NaT:
        return None
    return value


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


def transaction_from_record(record: Mapping[str, Any]) -> Transaction:
    """Build a Transaction from a stored row.

    Args:
        record: Mapping with the storage keys.  ``type`` defaults to expense
            and ``budget_type`` is the optional need/want override.

    Returns:
        Validated Transaction

    Raises:
        ValueError: If the date is missing or the amount or proration
            months are invalid
    """
    kind = _clean_string(record.get('type')) or TransactionKind.EXPENSE
    return Transaction(
        id=str(record.get('id')),
        amount=_number(record.get('amount')),
        date=_parse_date(record.get('date')),
        kind=TransactionKind(kind),
        category=_clean_string(record.get('category')),
        time=_parse_time(record.get('time')),
        excluded_from_budget=_parse_flag(record.get('excluded_from_budget')),
        prorate_months=_optional_int(record.get('prorate_months')),
        budget_type_override=_clean_string(record.get('budget_type')),
        merchant=_clean_string(record.get('merchant')),
        details=_clean_string(record.get('details')),
    )


def transactions_from_records(records: Iterable[Mapping[str, Any]]) -> List[Transaction]:
    return [transaction_from_record(record) for record in records]


def transactions_from_frame(df: pd.DataFrame) -> List[Transaction]:
    """Convert each DataFrame row into a Transaction."""
    if df is None or df.empty:
        return []
    records = (
        {key: _coerce_scalar(value) for key, value in row.items()}
        for row in df.to_dict(orient='records')
    )
    return transactions_from_records(records)


def transactions_to_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Tabular view of transactions with their monthly-equivalent amount."""
    rows = [
        {
            'id': t.id,
            'date': pd.Timestamp(t.date),
            'time': t.time,
            'type': t.kind.value,
            'amount': float(t.amount),
            'category': t.category,
            'merchant': t.merchant,
            'details': t.details,
            'excluded_from_budget': t.excluded_from_budget,
            'prorate_months': t.prorate_months,
            'budget_type': t.budget_type_override.value if t.budget_type_override else None,
            'monthly_amount': float(monthly_amount(t)),
        }
        for t in transactions
    ]
    return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS + ['monthly_amount'])


# ---------------------------------------------------------------------------
# Holdings
# ---------------------------------------------------------------------------


def investment_from_record(record: Mapping[str, Any]) -> Investment:
    """Build an Investment from either ``schemeCode``/``nav`` or snake_case keys."""
    scheme_code = record.get('scheme_code', record.get('schemeCode'))
    nav = record.get('nav_at_purchase', record.get('nav'))
    if _is_missing(scheme_code):
        raise ValueError(f"Investment record has no scheme code: {dict(record)!r}")
    return Investment(
        scheme_code=int(scheme_code),
        amount=_number(record.get('amount')),
        date=_parse_date(record.get('date')),
        nav_at_purchase=float(_number(nav)),
    )


def snapshot_from_record(record: Optional[Mapping[str, Any]]) -> AssetSnapshot:
    """Build an AssetSnapshot; null or missing asset fields become zero."""
    if not record:
        return AssetSnapshot()

    values = {}
    for field in ASSET_FIELDS:
        raw = record.get(field)
        if raw is not None and _is_missing(raw):
            logger.warning("Coerced blank %s to 0", field)
        values[field] = _number(raw)

    investments = [investment_from_record(item) for item in record.get('investments') or []]
    return AssetSnapshot(
        monthly_income=None if _is_missing(record.get('monthly_income')) else record['monthly_income'],
        needs_budget=None if _is_missing(record.get('needs_budget')) else record['needs_budget'],
        wants_budget=None if _is_missing(record.get('wants_budget')) else record['wants_budget'],
        investments=tuple(investments),
        **values,
    )
