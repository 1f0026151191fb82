"""In-memory ordered collection of expenses.

New records are inserted at the head, so the default order is
most-recently-added first. Records are removed by position.
"""
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .expense import Expense


class ExpenseStore:
    """Ordered, mutable collection of :class:`Expense` records."""

    def __init__(self, expenses: Optional[Iterable[Expense]] = None) -> None:
        self._expenses: List[Expense] = []
        for expense in expenses or ():
            self._check(expense)
            self._expenses.append(expense)

    @staticmethod
    def _check(expense: Expense) -> None:
        if not isinstance(expense, Expense):
            raise TypeError(f'Expected an Expense, got {type(expense).__name__}')

    def __len__(self) -> int:
        return len(self._expenses)

    def __iter__(self) -> Iterator[Expense]:
        return iter(tuple(self._expenses))

    def __getitem__(self, index: int) -> Expense:
        return self._expenses[index]

    def __repr__(self) -> str:
        return f'<ExpenseStore: {len(self)} expenses>'

    def add(self, expense: Expense) -> None:
        """Insert an expense at position 0."""
        self._check(expense)
        self._expenses.insert(0, expense)

    def remove_at(self, index: int) -> Expense:
        """Remove and return the expense at ``index``.

        Raises:
            IndexError: If ``index`` is outside ``[0, len(store))``.
        """
        if not isinstance(index, int) or not 0 <= index < len(self._expenses):
            raise IndexError(f'Expense index {index} out of range [0, {len(self._expenses)})')
        return self._expenses.pop(index)

    def clear(self) -> None:
        self._expenses.clear()

    def expenses(self) -> Tuple[Expense, ...]:
        """Return a snapshot of the records in store order."""
        return tuple(self._expenses)

    def category_totals(self) -> Dict[str, float]:
        """Sum amounts per category.

        Keys are ordered by first occurrence while scanning the store's
        current order, i.e. the category of the most recently added record
        comes first. Categories are compared by exact string equality.
        """
        totals: Dict[str, float] = {}
        for expense in self._expenses:
            totals[expense.category] = totals.get(expense.category, 0.0) + expense.amount
        return totals

    def distinct_months(self) -> List[str]:
        """Return the unique ``YYYY-MM`` keys, newest first."""
        return sorted({expense.month_key for expense in self._expenses}, reverse=True)
