"""bankctl — console retail-bank simulator backed by a local SQLite ledger."""

__version__ = "0.1.0"
