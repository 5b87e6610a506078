"""Tests for data models and exceptions."""

from datetime import datetime
from decimal import Decimal

import pytest

from flatbank.models.account import Account, AccountRecord, hash_pin
from flatbank.models.money import format_money, to_money
from flatbank.models.transaction import Transaction, TransactionType
from flatbank.models.exceptions import (
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
from flatbank.repositories.transaction_repo import TransactionRepository
from flatbank.storage.memory_storage import MemoryStorage


@pytest.fixture
def ledger_store():
    """Create an empty in-memory ledger store."""
    return MemoryStorage()


@pytest.fixture
def account(ledger_store):
    """Create a logged-in Account with 100.00 and PIN 1234."""
    record = AccountRecord(
        account_no="1001",
        name="Alice",
        balance=Decimal("100.00"),
        pin_hash=hash_pin("1234"),
    )
    return Account(record=record, ledger=TransactionRepository(ledger_store))


def test_hash_pin_known_values():
    """hash_pin is 64-bit FNV-1a."""
    assert hash_pin("") == 0xCBF29CE484222325
    assert hash_pin("a") == 0xAF63DC4C8601EC8C
    assert hash_pin("foobar") == 0x85944171F73967E8


def test_hash_pin_is_stable_and_fixed_width():
    """Same PIN, same hash; always fits in 64 bits."""
    assert hash_pin("1234") == hash_pin("1234")
    assert hash_pin("1234") != hash_pin("4321")
    assert 0 <= hash_pin("9999") < 2**64


def test_to_money_rounds_to_cents():
    """Amounts are rounded half-up to two decimals."""
    assert to_money("100") == Decimal("100.00")
    assert to_money("0.005") == Decimal("0.01")
    assert to_money(Decimal("12.344")) == Decimal("12.34")
    assert format_money(Decimal("7")) == "7.00"


def test_to_money_drops_sign_of_zero():
    """Values that round to zero come back as plain 0.00."""
    assert str(to_money("-0.001")) == "0.00"
    assert str(to_money(Decimal("-0"))) == "0.00"


@pytest.mark.parametrize("raw", ["", "abc", "nan", "inf", "1e400"])
def test_to_money_rejects_non_numbers(raw):
    """Non-numbers and non-finite values raise ValueError."""
    with pytest.raises(ValueError):
        to_money(raw)


def test_transaction_create():
    """Test creating a transaction stamped with the local time."""
    now = datetime(2026, 10, 18, 9, 5, 3)
    txn = Transaction.create("1001", TransactionType.DEPOSIT, Decimal("50.00"), now=now)

    assert txn.account_no == "1001"
    assert txn.type == "Deposit"
    assert txn.amount == Decimal("50.00")
    assert txn.date == "2026-10-18 09:05:03"
    assert txn.timestamp == now


def test_transaction_create_defaults_to_now():
    """Without an override the date has second precision."""
    txn = Transaction.create("1001", TransactionType.WITHDRAWAL, Decimal("1.00"))

    assert len(txn.date) == len("YYYY-MM-DD HH:MM:SS")
    assert txn.timestamp is not None


def test_transaction_malformed_date_has_no_timestamp():
    """A corrupt date string is kept but has no timestamp."""
    txn = Transaction("1001", "Deposit", Decimal("1.00"), "yesterday")
    assert txn.timestamp is None


def test_authenticate(account):
    """Correct PIN authenticates, any other does not."""
    assert account.authenticate("1234") is True
    assert account.authenticate("1235") is False
    assert account.authenticate("") is False


def test_deposit_updates_balance_and_ledger(account, ledger_store):
    """Deposit adds to the balance and logs exactly one entry."""
    txn = account.deposit(Decimal("50.00"))

    assert account.balance == Decimal("150.00")
    assert txn.type == TransactionType.DEPOSIT
    assert txn.amount == Decimal("50.00")
    assert account.view_transactions() == [txn]
    assert len(ledger_store.lines) == 1
    assert ledger_store.lines[0].startswith("1001,Deposit,50.00,")


def test_withdraw_success(account, ledger_store):
    """Withdraw within the balance subtracts and logs one entry."""
    assert account.withdraw(Decimal("30.00")) is True

    assert account.balance == Decimal("70.00")
    assert [t.type for t in account.view_transactions()] == [TransactionType.WITHDRAWAL]
    assert len(ledger_store.lines) == 1


def test_withdraw_exact_balance(account):
    """The whole balance can be withdrawn."""
    assert account.withdraw(Decimal("100.00")) is True
    assert account.balance == Decimal("0.00")


def test_withdraw_insufficient_funds(account, ledger_store):
    """Overdrawing fails with nothing changed."""
    assert account.withdraw(Decimal("150.00")) is False

    assert account.balance == Decimal("100.00")
    assert account.view_transactions() == []
    assert ledger_store.lines is None


def test_failed_ledger_write_rolls_back(account, ledger_store):
    """A ledger failure leaves balance and history as they were."""
    ledger_store.fail_writes = True

    with pytest.raises(StorageError):
        account.deposit(Decimal("50.00"))
    with pytest.raises(StorageError):
        account.withdraw(Decimal("50.00"))

    assert account.balance == Decimal("100.00")
    assert account.view_transactions() == []


def test_view_transactions_returns_copy(account):
    """Callers cannot mutate the history through the returned list."""
    account.deposit(Decimal("1.00"))
    history = account.view_transactions()
    history.clear()
    assert len(account.view_transactions()) == 1


def test_exceptions_hierarchy():
    """Test that all custom exceptions inherit from BankError."""
    for cls in (InvalidNameError, InvalidPinError, InvalidAmountError, InvalidAccountNumberError):
        assert issubclass(cls, ValidationError)
    assert issubclass(ValidationError, BankError)
    assert issubclass(AccountNotFoundError, BankError)
    assert issubclass(AuthenticationError, BankError)
    assert issubclass(InsufficientBalanceError, BankError)
    assert issubclass(StorageError, BankError)
    assert issubclass(RecordUpdateError, StorageError)
    assert issubclass(RecordDecodeError, BankError)

    err = RecordDecodeError("bad", field="balance", raw="x")
    assert err.field == "balance"
    assert err.raw == "x"
    assert str(err) == "bad"
