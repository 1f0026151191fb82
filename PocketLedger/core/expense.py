"""Expense record definition and input parsing.

An :class:`Expense` is a single immutable transaction. Records carry no
identifier: their identity is their position in the
:class:`~PocketLedger.core.store.ExpenseStore`.
"""
import dataclasses
import datetime
import math
import re

from ..status import status

DATE_FORMAT = '%Y-%m-%d'
MONTH_FORMAT = '%Y-%m'

AMOUNT_PATTERN = re.compile(r'[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)')


def month_key(date: datetime.date) -> str:
    """Return the zero-padded ``YYYY-MM`` key of a calendar date."""
    return f'{date.year:04d}-{date.month:02d}'


def parse_date(text: str) -> datetime.date:
    """Parse a ``YYYY-MM-DD`` string into a calendar date.

    Raises:
        ValueError: If the text is not a valid calendar date in the expected format.
    """
    return datetime.datetime.strptime(text.strip(), DATE_FORMAT).date()


def parse_amount(text: str) -> float:
    """Parse a plain decimal amount such as ``12``, ``-3.5`` or ``.75``.

    Exponents, digit separators and named values like ``nan`` are rejected.

    Raises:
        ValueError: If the text is not a plain, finite decimal number.
    """
    text = text.strip()
    if not AMOUNT_PATTERN.fullmatch(text):
        raise ValueError(f'Not a decimal number: "{text}"')
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f'Amount must be a finite number, got "{text}"')
    return value


@dataclasses.dataclass(frozen=True)
class Expense:
    """A single expense.

    Attributes:
        date (datetime.date): Calendar date of the expense.
        category (str): Free-form category label.
        amount (float): Amount, any sign.
        description (str): Free-form description, may be empty.
    """
    date: datetime.date
    category: str
    amount: float
    description: str = ''

    @property
    def month_key(self) -> str:
        return month_key(self.date)

    @classmethod
    def from_input(cls, date_text: str, category: str, amount_text: str, description: str = '') -> 'Expense':
        """Create an expense from raw user input.

        Args:
            date_text: Date as ``YYYY-MM-DD``.
            category: Category label.
            amount_text: Amount as a decimal number.
            description: Optional description.

        Returns:
            Expense: The new record.

        Raises:
            status.ValidationException: If a required field is empty, or the date or
                amount cannot be parsed.
        """
        date_text = (date_text or '').strip()
        amount_text = (amount_text or '').strip()
        category = (category or '').strip()
        description = (description or '').strip()

        if not date_text or not amount_text or not category:
            raise status.ValidationException('Please enter required fields.')

        try:
            date = parse_date(date_text)
        except ValueError as e:
            raise status.ValidationException('Invalid date format. Use yyyy-mm-dd.') from e

        try:
            amount = parse_amount(amount_text)
        except ValueError as e:
            raise status.ValidationException('Invalid number for amount.') from e

        return cls(date=date, category=category, amount=amount, description=description)
