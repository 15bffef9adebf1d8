"""
db/errors.py
------------
Error kinds surfaced by the database layer.
Callers can tell "no usable connection" apart from "the statement failed".
"""


class DatabaseError(Exception):
    """Base class for every failure raised by the database layer."""


class DatabaseConnectionError(DatabaseError):
    """
    The pool could not supply a usable connection.

    Raised when the database is unreachable, the credentials are rejected,
    or the pool has already been shut down.
    """


class StorageError(DatabaseError):
    """A statement failed after a connection was obtained."""
