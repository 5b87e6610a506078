"""Account data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING

from flatbank.models.exceptions import StorageError
from flatbank.models.money import to_money
from flatbank.models.transaction import Transaction, TransactionType

if TYPE_CHECKING:
    from flatbank.repositories.transaction_repo import TransactionRepository

FNV_OFFSET_BASIS = 0xCBF29CE484222325
FNV_PRIME = 0x100000001B3
MASK_64 = 0xFFFFFFFFFFFFFFFF


def hash_pin(pin: str) -> int:
    """
    Hash a PIN with 64-bit FNV-1a.

    This is a fast non-cryptographic hash kept for format compatibility; it
    offers no protection against brute force and can collide.
    """
    value = FNV_OFFSET_BASIS
    for byte in pin.encode("utf-8"):
        value ^= byte
        value = (value * FNV_PRIME) & MASK_64
    return value


@dataclass
class AccountRecord:
    """One row of the account store."""

    account_no: str
    name: str
    balance: Decimal
    pin_hash: int


@dataclass
class Account:
    """
    A logged-in account: its record plus the transaction history loaded
    from the ledger.

    Every balance change is appended to the ledger before it is reflected in
    the history. Persisting the record itself is the caller's job.
    """

    record: AccountRecord
    ledger: TransactionRepository
    transactions: list[Transaction] = field(default_factory=list)

    @property
    def account_no(self) -> str:
        return self.record.account_no

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def balance(self) -> Decimal:
        return self.record.balance

    @property
    def pin_hash(self) -> int:
        return self.record.pin_hash

    def authenticate(self, entered_pin: str) -> bool:
        """Check a PIN by comparing its hash against the stored one."""
        return hash_pin(entered_pin) == self.record.pin_hash

    def deposit(self, amount: Decimal) -> Transaction:
        """
        Add funds and log a Deposit entry.

        The amount must already be validated as positive.

        Returns:
            The appended Transaction

        Raises:
            StorageError: If the ledger write fails; the balance is left unchanged
        """
        return self._apply(TransactionType.DEPOSIT, to_money(amount))

    def withdraw(self, amount: Decimal) -> bool:
        """
        Remove funds and log a Withdrawal entry.

        Returns:
            False, with nothing changed, if the amount exceeds the balance

        Raises:
            StorageError: If the ledger write fails; the balance is left unchanged
        """
        amount = to_money(amount)
        if amount > self.record.balance:
            return False
        self._apply(TransactionType.WITHDRAWAL, amount)
        return True

    def view_transactions(self) -> list[Transaction]:
        """Return the history in chronological order."""
        return list(self.transactions)

    def _apply(self, type: TransactionType, amount: Decimal) -> Transaction:
        previous = self.record.balance
        if type is TransactionType.DEPOSIT:
            self.record.balance = to_money(previous + amount)
        else:
            self.record.balance = to_money(previous - amount)

        txn = Transaction.create(self.record.account_no, type, amount)
        try:
            self.ledger.create(txn)
        except StorageError:
            self.record.balance = previous
            raise
        self.transactions.append(txn)
        return txn
