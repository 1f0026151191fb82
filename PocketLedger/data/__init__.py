"""
PocketLedger data package: analytics and Qt models.

This package provides:

- :mod:`PocketLedger.data.data` – pandas summaries of the expenses (:func:`PocketLedger.data.data.get_monthly_totals`).
- :mod:`PocketLedger.data.model` – Qt models (:class:`PocketLedger.data.model.ExpenseModel`, :class:`PocketLedger.data.model.CategoryTotalsModel`) rendering the ledger store.
"""
