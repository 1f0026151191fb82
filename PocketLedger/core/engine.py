"""Month filtering and totals over the current store state."""
from typing import Iterable, List, Optional

from .expense import Expense
from .store import ExpenseStore

ALL_MONTHS = 'all'
ALL_MONTHS_LABEL = 'All months'


def is_all_months(key: Optional[str]) -> bool:
    """True for ``None``, ``'all'`` or the ``'All months'`` label."""
    if key is None:
        return True
    return key.strip().lower() in (ALL_MONTHS, ALL_MONTHS_LABEL.lower())


def month_label(key: Optional[str]) -> str:
    return ALL_MONTHS_LABEL if is_all_months(key) else key


def filter_by_month(store: ExpenseStore, key: Optional[str] = None) -> List[Expense]:
    """Return the expenses of the given ``YYYY-MM`` month in store order.

    Args:
        store: The store to filter.
        key: A ``YYYY-MM`` month key. ``None`` or ``'all'`` selects every expense.

    Returns:
        list[Expense]: The matching expenses.
    """
    if is_all_months(key):
        return list(store.expenses())
    key = key.strip()
    return [e for e in store.expenses() if e.month_key == key]


def total(expenses: Iterable[Expense]) -> float:
    """Sum the amounts of the given expenses, 0.0 when empty."""
    return sum((e.amount for e in expenses), 0.0)
