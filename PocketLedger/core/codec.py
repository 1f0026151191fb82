"""CSV serialization of the expense store.

Three operations are provided:

- :func:`save` writes the persisted file. Commas and newlines in text fields
  are replaced by spaces and no quoting is applied.
- :func:`export` writes a user-chosen file. Text fields are quoted, with
  inner quotes doubled, only when they contain a comma, a newline or a quote.
- :func:`load` reads a persisted file using a naive split on the first three
  commas. Quotes are not un-escaped.

Every write replaces the whole file.
"""
import logging
import os
import pathlib
import shutil
import tempfile
from typing import Callable, Iterable, List, Union

from .expense import Expense, DATE_FORMAT, parse_amount, parse_date
from .store import ExpenseStore
from ..status import status

HEADER: List[str] = ['date', 'category', 'amount', 'description']
HEADER_LINE: str = ','.join(HEADER)

DELIMITER = ','
QUOTE = '"'
NEWLINE_CHARS = '\r\n'

PathLike = Union[str, os.PathLike]


def format_amount(amount: float) -> str:
    """Format an amount with exactly two decimals and no grouping."""
    return f'{amount:.2f}'


def sanitize_field(value: str) -> str:
    """Replace every comma and newline character with a space."""
    for char in DELIMITER + NEWLINE_CHARS:
        value = value.replace(char, ' ')
    return value


def escape_field(value: str) -> str:
    """Quote a field if it contains a comma, a newline or a double quote."""
    if any(char in value for char in DELIMITER + NEWLINE_CHARS + QUOTE):
        return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE
    return value


def format_line(expense: Expense, encode_text: Callable[[str], str]) -> str:
    """Format a single expense as a CSV line, without the line terminator."""
    return DELIMITER.join((
        expense.date.strftime(DATE_FORMAT),
        encode_text(expense.category or ''),
        format_amount(expense.amount),
        encode_text(expense.description or ''),
    ))


def _write_lines(path: PathLike, lines: Iterable[str]) -> None:
    """Write lines to a temporary sibling file and move it over ``path``.

    Raises:
        status.StorageException: If the file cannot be written.
    """
    path = pathlib.Path(path)
    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(
                'w',
                encoding='utf-8',
                newline='',
                dir=path.parent,
                prefix=f'.{path.name}.',
                suffix='.tmp',
                delete=False
        ) as f:
            tmp_path = pathlib.Path(f.name)
            for line in lines:
                f.write(line)
                f.write('\n')
        if path.exists():
            shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                logging.debug(f'Could not remove temporary file "{tmp_path}"')
        raise status.StorageException(f'Could not write "{path}": {e}') from e


def save(store: ExpenseStore, path: PathLike) -> None:
    """Persist the store, flattening commas and newlines in text fields.

    Raises:
        status.StorageException: If the file cannot be written.
    """
    lines = [HEADER_LINE] + [format_line(e, sanitize_field) for e in store]
    _write_lines(path, lines)
    logging.debug(f'Saved {len(store)} expenses to "{path}"')


def export(store: ExpenseStore, path: PathLike) -> None:
    """Export the store to a user-chosen file, quoting text fields where needed.

    Raises:
        status.StorageException: If the file cannot be written.
    """
    lines = [HEADER_LINE] + [format_line(e, escape_field) for e in store]
    _write_lines(path, lines)
    logging.info(f'Exported {len(store)} expenses to "{path}"')


def parse_line(line: str) -> Expense:
    """Parse a persisted CSV line.

    The line is split on the first three commas only, so the description
    keeps any further commas.

    Raises:
        ValueError: If the line has fewer than three fields, or the date or amount is malformed.
    """
    parts = line.split(DELIMITER, 3)
    if len(parts) < 3:
        raise ValueError(f'Expected at least 3 fields, got {len(parts)}')

    date = parse_date(parts[0])
    amount = parse_amount(parts[2])
    description = parts[3] if len(parts) == 4 else ''
    return Expense(date=date, category=parts[1], amount=amount, description=description)


def load(path: PathLike) -> ExpenseStore:
    """Load a persisted CSV file into a new store, keeping file order.

    A missing file yields an empty store. The header line is discarded,
    blank lines and lines with fewer than three fields are skipped.

    Returns:
        ExpenseStore: The loaded store.

    Raises:
        status.ParseException: On the first line with a malformed date or amount.
            The exception's ``store`` holds the records read before that line.
        status.StorageException: If the file cannot be read.
    """
    path = pathlib.Path(path)
    if not path.exists():
        logging.debug(f'No expenses file at "{path}", starting empty.')
        return ExpenseStore()

    expenses: List[Expense] = []
    try:
        with path.open('r', encoding='utf-8') as f:
            f.readline()  # header

            for line_number, line in enumerate(f, start=2):
                line = line.rstrip('\n')
                if not line.strip():
                    continue
                if len(line.split(DELIMITER, 3)) < 3:
                    logging.debug(f'Skipping line {line_number} in "{path}": not enough fields.')
                    continue

                try:
                    expenses.append(parse_line(line))
                except ValueError as e:
                    raise status.ParseException(
                        f'Line {line_number} of "{path}": {e}',
                        line_number=line_number,
                        store=ExpenseStore(expenses)
                    ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise status.StorageException(f'Could not read "{path}": {e}') from e

    logging.debug(f'Loaded {len(expenses)} expenses from "{path}"')
    return ExpenseStore(expenses)
