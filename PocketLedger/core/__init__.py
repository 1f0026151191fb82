"""
Core package for PocketLedger providing the expense model and its persistence.

This package includes:

- :mod:`PocketLedger.core.expense` – The expense record and user input parsing.
- :mod:`PocketLedger.core.store` – Ordered in-memory collection of expenses with category and month aggregates.
- :mod:`PocketLedger.core.codec` – CSV save, export and load.
- :mod:`PocketLedger.core.engine` – Month filtering and totals.
- :mod:`PocketLedger.core.ledger` – Session owner of the store that rewrites the CSV file after every change.
"""
