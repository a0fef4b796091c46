from __future__ import annotations

from typing import Optional


class LedgerError(Exception):
    """Base class for failures surfaced by the ledger service."""

    default_message = "Ledger operation failed."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class InvalidInputError(LedgerError):
    """Raised when request parameters are malformed or out of range."""

    default_message = "Invalid input."


class AccountNotFoundError(LedgerError):
    """Raised when an account id is missing from the store."""

    default_message = "Account not found."


class InsufficientFundsError(LedgerError):
    """Raised when a withdrawal/transfer would drop balance below zero."""

    default_message = "Insufficient funds."


class PersistenceError(LedgerError):
    """Raised when the store fails unexpectedly. The cause is only logged."""

    default_message = "Internal server error."
