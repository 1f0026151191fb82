"""
Unit tests for PocketLedger.core.expense
(covers date and amount parsing and record creation from user input).

Run:
    python -m unittest tests.test_expense
"""
import dataclasses
import datetime
import logging
import unittest

from PocketLedger.core.expense import Expense, month_key, parse_amount, parse_date
from PocketLedger.log import log
from PocketLedger.status import status
from PocketLedger.ui.actions import signals
from tests.base import BaseTestCase


class ParseHelperTests(unittest.TestCase):
    def test_parse_date(self):
        self.assertEqual(parse_date('2024-01-15'), datetime.date(2024, 1, 15))
        self.assertEqual(parse_date(' 2024-01-15 '), datetime.date(2024, 1, 15))

    def test_parse_date_rejects_invalid(self):
        for text in ('2024/01/15', '15-01-2024', '2024-02-30', 'yesterday', ''):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_date(text)

    def test_parse_amount(self):
        self.assertEqual(parse_amount('12.5'), 12.5)
        self.assertEqual(parse_amount('-3'), -3.0)
        self.assertEqual(parse_amount(' 0 '), 0.0)
        self.assertEqual(parse_amount('+.75'), 0.75)
        self.assertEqual(parse_amount('12.'), 12.0)

    def test_parse_amount_rejects_invalid(self):
        for text in ('abc', '', '1,000', '1_000', '1e3', '0x10', '١٢', 'nan', 'inf', '+-1', '.'):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_amount(text)

    def test_month_key_is_zero_padded(self):
        self.assertEqual(month_key(datetime.date(2024, 3, 9)), '2024-03')
        self.assertEqual(month_key(datetime.date(999, 12, 1)), '0999-12')


class ExpenseTests(BaseTestCase):
    def test_from_input(self):
        expense = Expense.from_input(' 2024-01-15 ', ' Food ', ' 12.50 ', ' Lunch ')
        self.assertEqual(expense.date, datetime.date(2024, 1, 15))
        self.assertEqual(expense.category, 'Food')
        self.assertEqual(expense.amount, 12.5)
        self.assertEqual(expense.description, 'Lunch')
        self.assertEqual(expense.month_key, '2024-01')

    def test_from_input_description_optional(self):
        expense = Expense.from_input('2024-01-15', 'Food', '1')
        self.assertEqual(expense.description, '')

    def test_from_input_accepts_any_sign(self):
        self.assertEqual(Expense.from_input('2024-01-15', 'Refund', '-20').amount, -20.0)
        self.assertEqual(Expense.from_input('2024-01-15', 'Free', '0').amount, 0.0)

    def test_from_input_missing_fields(self):
        cases = (
            ('', 'Food', '1'),
            ('2024-01-15', '', '1'),
            ('2024-01-15', 'Food', ''),
            ('2024-01-15', '   ', '1'),
        )
        for args in cases:
            with self.subTest(args=args):
                with self.assertRaises(status.ValidationException) as ctx:
                    Expense.from_input(*args)
                self.assertEqual(ctx.exception.message, 'Please enter required fields.')

    def test_from_input_invalid_date(self):
        with self.assertRaises(status.ValidationException) as ctx:
            Expense.from_input('15/01/2024', 'Food', '1')
        self.assertEqual(ctx.exception.message, 'Invalid date format. Use yyyy-mm-dd.')

    def test_from_input_invalid_amount(self):
        with self.assertRaises(status.ValidationException) as ctx:
            Expense.from_input('2024-01-15', 'Food', 'twelve')
        self.assertEqual(ctx.exception.message, 'Invalid number for amount.')

    def test_invalid_input_is_not_reported_as_error(self):
        log.setup_logging(enable_stream_handler=False, enable_qt_handler=False)
        emitted = []

        def _on_show_logs() -> None:
            emitted.append('showLogs')

        def _on_error(message: str) -> None:
            emitted.append(message)

        signals.showLogs.connect(_on_show_logs)
        signals.error.connect(_on_error)
        try:
            with self.assertRaises(status.ValidationException):
                Expense.from_input('2024-13-01', 'Food', '5')
        finally:
            signals.showLogs.disconnect(_on_show_logs)
            signals.error.disconnect(_on_error)

        self.assertEqual(emitted, [])
        self.assertEqual(log.get_tank_handler().get_logs(logging.ERROR), [])

    def test_validation_exception_is_value_error(self):
        with self.assertRaises(ValueError):
            Expense.from_input('2024-01-15', 'Food', 'twelve')

    def test_expense_is_immutable(self):
        expense = Expense.from_input('2024-01-15', 'Food', '1')
        with self.assertRaises(dataclasses.FrozenInstanceError):
            expense.amount = 2.0


if __name__ == '__main__':
    unittest.main()
