"""Bank service for business logic layer."""

import logging
from dataclasses import dataclass
from decimal import Decimal

from flatbank.models.account import Account, AccountRecord, hash_pin
from flatbank.models.exceptions import (
    AccountNotFoundError,
    AuthenticationError,
    InsufficientBalanceError,
    InvalidAccountNumberError,
    InvalidAmountError,
    InvalidNameError,
    InvalidPinError,
    RecordUpdateError,
    StorageError,
)
from flatbank.models.money import ZERO, to_money
from flatbank.models.transaction import Transaction, TransactionType
from flatbank.repositories.account_number_repo import AccountNumberRepository
from flatbank.repositories.account_repo import AccountRepository
from flatbank.repositories.codec import DELIMITER, DecodePolicy
from flatbank.repositories.transaction_repo import TransactionRepository
from flatbank.storage.file_storage import FileStorage

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Account not found or incorrect PIN."
INVALID_AMOUNT_MESSAGE = "Invalid amount. Please enter a positive value."


@dataclass(frozen=True)
class AuditReport:
    """Stored balance of an account against the balance its ledger implies."""

    account_no: str
    stored_balance: Decimal
    ledger_balance: Decimal
    transaction_count: int

    @property
    def consistent(self) -> bool:
        return self.stored_balance == self.ledger_balance

    @property
    def difference(self) -> Decimal:
        return self.stored_balance - self.ledger_balance


class BankService:
    """Service layer for banking operations."""

    def __init__(
        self,
        account_repo: AccountRepository,
        transaction_repo: TransactionRepository,
        account_number_repo: AccountNumberRepository,
        max_amount: int = 1_000_000_000_000,
    ):
        """
        Initialize the BankService with repositories.

        Args:
            account_repo: Repository for account records
            transaction_repo: Repository for the transaction ledger
            account_number_repo: Allocator for new account numbers
            max_amount: Maximum allowed transaction amount (default: 10^12)
        """
        self._account_repo = account_repo
        self._transaction_repo = transaction_repo
        self._account_number_repo = account_number_repo
        self._max_amount = Decimal(max_amount)

    def _validate_amount(self, amount, action: str) -> Decimal:
        """
        Round an amount to cents and check it is positive and within limits.

        Raises:
            InvalidAmountError: If the amount is not a number, not positive or too large
        """
        try:
            amount = to_money(amount)
        except ValueError:
            raise InvalidAmountError(INVALID_AMOUNT_MESSAGE)
        if amount <= 0:
            raise InvalidAmountError(INVALID_AMOUNT_MESSAGE)
        if amount > self._max_amount:
            raise InvalidAmountError(
                f"Amount {amount} exceeds maximum allowed {action.lower()} of {self._max_amount}"
            )
        return amount

    def create_account(self, name: str, pin: str, initial_deposit) -> Account:
        """
        Create a new account.

        The initial deposit, zero included, is written to the ledger as the
        account's first Deposit before the record is appended, so a failed
        ledger write leaves no record behind.

        Args:
            name: The account holder's name
            pin: A four-digit PIN
            initial_deposit: Opening balance, zero or positive

        Returns:
            The created Account, with its history loaded

        Raises:
            InvalidNameError: If the name is empty or contains a comma
            InvalidPinError: If the PIN is not exactly four digits
            InvalidAmountError: If the initial deposit is negative or too large
            StorageError: If the record or ledger cannot be written
        """
        if not name:
            raise InvalidNameError("Name cannot be empty.")
        if DELIMITER in name or "\n" in name:
            raise InvalidNameError("Name cannot contain commas or line breaks.")
        if len(pin) != 4 or not all(c in "0123456789" for c in pin):
            raise InvalidPinError("PIN must be exactly 4 digits.")
        try:
            initial_deposit = to_money(initial_deposit)
        except ValueError:
            raise InvalidAmountError("Initial deposit must be a number.")
        if initial_deposit < 0:
            raise InvalidAmountError("Initial deposit cannot be negative.")
        if initial_deposit > self._max_amount:
            raise InvalidAmountError(
                f"Amount {initial_deposit} exceeds maximum allowed deposit of {self._max_amount}"
            )

        account_no = self._account_number_repo.next_account_number()
        record = AccountRecord(
            account_no=account_no,
            name=name,
            balance=initial_deposit,
            pin_hash=hash_pin(pin),
        )
        txn = Transaction.create(account_no, TransactionType.DEPOSIT, initial_deposit)
        self._transaction_repo.create(txn)
        self._account_repo.create(record)

        account = Account(record=record, ledger=self._transaction_repo, transactions=[txn])
        logger.info("Created account %s", account_no)
        return account

    def login(self, account_no: str, pin: str) -> Account:
        """
        Authenticate and load an account from the stores.

        Args:
            account_no: The account number
            pin: The entered PIN

        Returns:
            The Account, rebuilt from the record store and the ledger

        Raises:
            InvalidAccountNumberError: If the account number is empty
            AuthenticationError: If the account is unknown or the PIN is wrong
            StorageError: If a store cannot be read
        """
        if not account_no:
            raise InvalidAccountNumberError("Account number cannot be empty.")

        record = self._account_repo.find_by_account_no(account_no)
        if record is None:
            logger.info("Login failed for %s", account_no)
            raise AuthenticationError(LOGIN_FAILED_MESSAGE)

        account = Account(record=record, ledger=self._transaction_repo)
        if not account.authenticate(pin):
            logger.info("Login failed for %s", account_no)
            raise AuthenticationError(LOGIN_FAILED_MESSAGE)

        account.transactions = self._transaction_repo.find_by_account(account_no)
        logger.info("Account %s logged in", account_no)
        return account

    def deposit(self, account: Account, amount) -> Transaction:
        """
        Deposit funds into a logged-in account and persist the new balance.

        Args:
            account: The logged-in Account
            amount: The amount to deposit

        Returns:
            The logged Transaction

        Raises:
            InvalidAmountError: If the amount is not positive or too large
            StorageError: If the ledger cannot be written
            RecordUpdateError: If the ledger entry was written but the record was not
        """
        amount = self._validate_amount(amount, "Deposit")
        txn = account.deposit(amount)
        self._save(account, txn)
        return txn

    def withdraw(self, account: Account, amount) -> Transaction:
        """
        Withdraw funds from a logged-in account and persist the new balance.

        Args:
            account: The logged-in Account
            amount: The amount to withdraw

        Returns:
            The logged Transaction

        Raises:
            InvalidAmountError: If the amount is not positive or too large
            InsufficientBalanceError: If the amount exceeds the balance
            StorageError: If the ledger cannot be written
            RecordUpdateError: If the ledger entry was written but the record was not
        """
        amount = self._validate_amount(amount, "Withdrawal")
        if not account.withdraw(amount):
            raise InsufficientBalanceError(
                f"Insufficient balance: {account.balance} available, {amount} requested"
            )
        txn = account.transactions[-1]
        self._save(account, txn)
        return txn

    def _save(self, account: Account, txn: Transaction):
        try:
            self._account_repo.update(account.record)
        except StorageError as err:
            logger.error(
                "Account %s: %s logged but record not updated", account.account_no, txn.type
            )
            raise RecordUpdateError(str(err), transaction=txn) from err

    def get_balance(self, account: Account) -> Decimal:
        return account.balance

    def pull_transactions(self, account: Account, n: int | None = None) -> list[Transaction]:
        """
        Get the transaction history of a logged-in account.

        Args:
            account: The logged-in Account
            n: If given, only the most recent n transactions

        Returns:
            Transactions in chronological order
        """
        history = account.view_transactions()
        if n is not None:
            return history[-n:] if n > 0 else []
        return history

    def audit(self, account_no: str) -> AuditReport:
        """
        Compare an account's stored balance with a replay of its ledger.

        A mismatch means a ledger entry was written without the matching
        record update, or the other way round.

        Raises:
            AccountNotFoundError: If the account doesn't exist
        """
        record = self._account_repo.find_by_account_no(account_no)
        if record is None:
            raise AccountNotFoundError(f"Account {account_no} not found")

        transactions = self._transaction_repo.find_by_account(account_no)
        replayed = ZERO
        for txn in transactions:
            if txn.type == TransactionType.DEPOSIT:
                replayed += txn.amount
            elif txn.type == TransactionType.WITHDRAWAL:
                replayed -= txn.amount
            else:
                logger.warning("Account %s: unknown transaction type %r", account_no, txn.type)

        report = AuditReport(
            account_no=account_no,
            stored_balance=record.balance,
            ledger_balance=to_money(replayed),
            transaction_count=len(transactions),
        )
        if not report.consistent:
            logger.warning(
                "Account %s stored balance %s differs from ledger balance %s",
                account_no,
                report.stored_balance,
                report.ledger_balance,
            )
        return report


def build_bank_service(settings) -> BankService:
    """
    Wire a BankService to the file stores named by the settings.

    Args:
        settings: A config.settings.Settings instance

    Returns:
        A BankService over FileStorage-backed repositories
    """
    policy = DecodePolicy.STRICT if settings.strict_decoding else DecodePolicy.ZERO_FALLBACK
    return BankService(
        account_repo=AccountRepository(FileStorage(settings.accounts_path), policy),
        transaction_repo=TransactionRepository(FileStorage(settings.transactions_path), policy),
        account_number_repo=AccountNumberRepository(
            FileStorage(settings.account_number_path), start=settings.first_account_number
        ),
        max_amount=settings.max_amount,
    )
