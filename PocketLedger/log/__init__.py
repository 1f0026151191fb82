"""
Logging subsystem for application logging.

Modules:

- :mod:`PocketLedger.log.log` – Root logger setup, an in-memory log tank and the Qt message bridge.
"""
