"""Custom exceptions for the banking system."""


class BankError(Exception):
    """Base exception for all banking-related errors."""
    pass


class ValidationError(BankError):
    """Raised when user-supplied input is rejected before any state changes."""
    pass


class InvalidNameError(ValidationError):
    """Raised when an owner name is empty or contains the field delimiter."""
    pass


class InvalidPinError(ValidationError):
    """Raised when a PIN is not exactly four digits."""
    pass


class InvalidAmountError(ValidationError):
    """Raised when an invalid amount is provided (e.g., negative amount)."""
    pass


class InvalidAccountNumberError(ValidationError):
    """Raised when an account number is missing."""
    pass


class AccountNotFoundError(BankError):
    """Raised when an account cannot be found."""
    pass


class AuthenticationError(BankError):
    """Raised when login fails, without saying whether the account or the PIN was wrong."""
    pass


class InsufficientBalanceError(BankError):
    """Raised when an account has insufficient balance for a transaction."""
    pass


class StorageError(BankError):
    """Raised when a backing store cannot be opened, read or written."""
    pass


class RecordUpdateError(StorageError):
    """Raised when a transaction reached the ledger but the account record was not rewritten."""

    def __init__(self, message: str = "", transaction=None):
        super().__init__(message)
        self.transaction = transaction


class RecordDecodeError(BankError):
    """Raised when a stored line has a field that cannot be decoded."""

    def __init__(self, message: str = "", field: str | None = None, raw: str | None = None):
        super().__init__(message)
        self.field = field
        self.raw = raw
