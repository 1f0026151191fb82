"""
Integration tests for PocketLedger.core.ledger
(covers loading, persistence after each mutation and non-fatal save failures).

Run:
    python -m unittest tests.test_ledger
"""
import unittest

from PocketLedger.core import codec
from PocketLedger.core import ledger
from PocketLedger.core.store import ExpenseStore
from PocketLedger.settings import lib
from PocketLedger.ui.actions import signals
from tests.base import BaseTestCase, make_expense, mute_ui_signals, read_lines, write_lines


class LedgerAPITests(BaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.api = ledger.ledger

        self.changed = []
        signals.expensesChanged.connect(self._on_changed)

    def tearDown(self) -> None:
        signals.expensesChanged.disconnect(self._on_changed)
        super().tearDown()

    def _on_changed(self) -> None:
        self.changed.append(True)

    def test_load_missing_file(self):
        self.assertTrue(self.api.load())
        self.assertEqual(len(self.api.store), 0)
        self.assertTrue(self.changed)

    def test_add_persists(self):
        self.api.load()
        self.assertTrue(self.api.add(make_expense('2024-01-15', 'Food', 12.5, 'Lunch')))
        self.assertTrue(self.api.add(make_expense('2024-01-16', 'Bills', 30.0, 'Power')))

        self.assertEqual(read_lines(self.csv_path), [
            'date,category,amount,description',
            '2024-01-16,Bills,30.00,Power',
            '2024-01-15,Food,12.50,Lunch',
        ])

    def test_add_then_reload(self):
        self.api.add(make_expense('2024-01-15', 'Food', 12.5))
        self.api.add(make_expense('2024-01-16', 'Bills', 30.0))

        api = ledger.LedgerAPI(path=self.csv_path)
        self.assertTrue(api.load())
        self.assertEqual(api.expenses(), self.api.expenses())

    def test_remove_at_persists(self):
        self.api.add(make_expense('2024-01-15', 'Food', 12.5))
        self.api.add(make_expense('2024-01-16', 'Bills', 30.0))

        removed = self.api.remove_at(0)
        self.assertEqual(removed.category, 'Bills')
        self.assertEqual(len(codec.load(self.csv_path)), 1)

    def test_remove_at_out_of_range(self):
        self.api.add(make_expense('2024-01-15', 'Food', 12.5))
        self.changed.clear()

        with self.assertRaises(IndexError):
            self.api.remove_at(3)
        self.assertEqual(len(self.api.store), 1)
        self.assertFalse(self.changed)

    def test_remove_rows(self):
        for day in (1, 2, 3, 4):
            self.api.add(make_expense(f'2024-01-0{day}', 'Food', float(day)))
        # Store order: 4, 3, 2, 1
        removed = self.api.remove_rows([0, 2, 2])

        self.assertEqual([e.amount for e in removed], [2.0, 4.0])
        self.assertEqual([e.amount for e in self.api.expenses()], [3.0, 1.0])
        self.assertEqual(len(codec.load(self.csv_path)), 2)

    def test_remove_rows_invalid_index_changes_nothing(self):
        self.api.add(make_expense('2024-01-15', 'Food', 12.5))
        with self.assertRaises(IndexError):
            self.api.remove_rows([0, 1])
        self.assertEqual(len(self.api.store), 1)

    def test_muted_signals(self):
        with mute_ui_signals():
            self.api.add(make_expense('2024-01-15', 'Food', 12.5))
        self.assertFalse(self.changed)
        self.assertEqual(len(codec.load(self.csv_path)), 1)

    def test_remove_rows_empty(self):
        self.assertEqual(self.api.remove_rows([]), [])

    def test_save_failure_keeps_in_memory_change(self):
        api = ledger.LedgerAPI(path=self.tmp_dir / 'missing' / 'expenses.csv')
        self.assertFalse(api.add(make_expense('2024-01-15', 'Food', 12.5)))

        self.assertEqual(len(api.store), 1)
        self.assertEqual(api.total(), 12.5)
        self.assertFalse((self.tmp_dir / 'missing').exists())

    def test_load_partial_file(self):
        write_lines(self.csv_path, [
            'date,category,amount,description',
            '2024-01-15,Food,1.00,ok',
            '2024-01-16,Food,oops,bad',
        ])
        self.assertFalse(self.api.load())
        self.assertEqual(len(self.api.store), 1)
        self.assertTrue(self.changed)

    def test_load_replaces_store(self):
        self.api.store.add(make_expense('2024-01-15', 'Food', 1.0))
        write_lines(self.csv_path, ['date,category,amount,description'])
        self.api.load()
        self.assertEqual(len(self.api.store), 0)

    def test_export(self):
        self.api.add(make_expense('2024-01-15', 'Food', 12.5, 'Hello, "world"'))
        path = self.tmp_dir / 'export.csv'
        self.api.export(path)
        self.assertEqual(read_lines(path)[1], '2024-01-15,Food,12.50,"Hello, ""world"""')
        # The persisted file keeps the flattened form
        self.assertEqual(read_lines(self.csv_path)[1], '2024-01-15,Food,12.50,Hello  "world"')

    def test_filter_and_total(self):
        self.api.add(make_expense('2024-01-15', 'Food', 10.0))
        self.api.add(make_expense('2024-02-01', 'Travel', 5.0))
        self.api.add(make_expense('2024-01-20', 'Food', 2.5))

        self.assertEqual([e.date.day for e in self.api.filter_by_month('2024-01')], [20, 15])
        self.assertEqual(self.api.total('2024-01'), 12.5)
        self.assertEqual(self.api.total('all'), 17.5)
        self.assertEqual(self.api.total('1999-01'), 0.0)

    def test_follows_csv_path_setting(self):
        other = self.tmp_dir / 'other.csv'
        codec.save(ExpenseStore([make_expense('2024-01-15', 'Food', 1.0)]), other)

        api = ledger.LedgerAPI()
        lib.settings['csv_path'] = str(other)

        self.assertEqual(api.path, other)
        self.assertEqual(len(api.store), 1)
        # A ledger opened on an explicit path does not follow the setting
        self.assertEqual(self.api.path, self.csv_path)


if __name__ == '__main__':
    unittest.main()
