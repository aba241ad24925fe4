"""Infrastructure layer — SQLite engine, schema, and the account store.

This layer depends on stdlib and third-party libs (SQLAlchemy).
It may use domain types and errors, but never imports from services,
commands, or output.
"""
