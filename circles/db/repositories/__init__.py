"""
Per-domain repository modules for database access.

Each module is a set of plain functions taking a SQLAlchemy ``Session``.
Reads return a record, a list or ``None`` and never raise for absence;
inserts return the new integer id; updates return whether a row changed.
"""
