"""Data models for the banking system."""

from .account import Account, AccountRecord, hash_pin
from .transaction import Transaction, TransactionType
from .exceptions import (
    BankError,
    ValidationError,
    InvalidNameError,
    InvalidPinError,
    InvalidAmountError,
    InvalidAccountNumberError,
    AccountNotFoundError,
    AuthenticationError,
    InsufficientBalanceError,
    StorageError,
    RecordUpdateError,
    RecordDecodeError,
)

__all__ = [
    "Account",
    "AccountRecord",
    "hash_pin",
    "Transaction",
    "TransactionType",
    "BankError",
    "ValidationError",
    "InvalidNameError",
    "InvalidPinError",
    "InvalidAmountError",
    "InvalidAccountNumberError",
    "AccountNotFoundError",
    "AuthenticationError",
    "InsufficientBalanceError",
    "StorageError",
    "RecordUpdateError",
    "RecordDecodeError",
]
