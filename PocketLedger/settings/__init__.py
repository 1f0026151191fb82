"""
Settings package: configuration API and localization.

This package provides:

- :mod:`PocketLedger.settings.lib` – Core settings management and schema validation.
- :mod:`PocketLedger.settings.locale` – Localization utilities for currency formatting.
"""
