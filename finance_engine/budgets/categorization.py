"""Category classification utilities.

This module resolves which budget type (need or want) a category or an
individual transaction belongs to, and which categories are excluded from
budget totals by default.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from ..models import BudgetType, Transaction
from ..settings import get_config_value


def expense_categories() -> List[str]:
    """Configured expense categories, in display order."""
    return list(get_config_value('engine', 'expense_categories', default=[]))


def category_budget_types() -> Dict[str, BudgetType]:
    """Get the static category to budget-type table from configuration."""
    table = get_config_value('engine', 'category_budget_types', default={})
    return {category: BudgetType(kind) for category, kind in table.items()}


def resolve_budget_type(
    category: Optional[str],
    override: Optional[BudgetType] = None,
) -> BudgetType:
    """Classify a category as a need or a want.

    A per-transaction override wins, then the static table, and anything
    the table does not know is a want.

    Args:
        category: Category name (may be None for uncategorized)
        override: Explicit budget type recorded on the transaction

    Returns:
        BudgetType.NEED or BudgetType.WANT

    Example:
        >>> resolve_budget_type('Groceries')
        <BudgetType.NEED: 'need'>
        >>> resolve_budget_type('Groceries', BudgetType.WANT)
        <BudgetType.WANT: 'want'>
        >>> resolve_budget_type('Unknown')
        <BudgetType.WANT: 'want'>
    """
    if override is not None:
        return BudgetType(override)
    if not category:
        return BudgetType.WANT
    return category_budget_types().get(category, BudgetType.WANT)


def transaction_budget_type(transaction: Transaction) -> BudgetType:
    return resolve_budget_type(transaction.category, transaction.budget_type_override)


def is_excluded_by_default(category: Optional[str]) -> bool:
    """Whether new transactions in this category start excluded from the budget."""
    if not category:
        return False
    return category in get_config_value('engine', 'excluded_categories', default=[])


def savings_categories() -> List[str]:
    """Categories treated as savings rather than consumption."""
    return list(get_config_value('engine', 'savings_categories', default=[]))
