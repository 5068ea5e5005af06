"""Budget-specific utilities and business logic.

This module provides all budget-related functionality including:
- Need/want classification of categories and transactions
- Monthly budget status (daily allowance, remaining, percent used)
- Needs vs wants budget tracking
"""

from .categorization import (
    expense_categories,
    category_budget_types,
    resolve_budget_type,
    transaction_budget_type,
    is_excluded_by_default,
    savings_categories,
)
from .calculations import (
    BudgetInfo,
    BudgetTypeInfo,
    budget_info,
    budget_type_info,
    days_remaining_in_month,
)

__all__ = [
    # Categorization
    'expense_categories',
    'category_budget_types',
    'resolve_budget_type',
    'transaction_budget_type',
    'is_excluded_by_default',
    'savings_categories',
    # Calculations
    'BudgetInfo',
    'BudgetTypeInfo',
    'budget_info',
    'budget_type_info',
    'days_remaining_in_month',
]
