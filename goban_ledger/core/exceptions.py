"""Exceptions shared across layers. The API layer maps each one onto a status code."""


class LedgerError(Exception):
    """Top-level exception for everything the ledger raises on purpose."""

    status_code: int = 500


class InvalidInputError(LedgerError):
    """Malformed or missing field in a request payload."""

    status_code = 400


class GameNotFoundError(LedgerError):
    """Referenced game does not exist."""

    status_code = 404


class StorageError(LedgerError):
    """The underlying database failed to read or write."""

    status_code = 500
