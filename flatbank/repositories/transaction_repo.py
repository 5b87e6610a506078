"""Transaction repository backed by the append-only ledger."""

import logging

from flatbank.models.transaction import Transaction
from flatbank.repositories.codec import (
    DecodePolicy,
    decode_transaction,
    encode_transaction,
    leading_field,
)
from flatbank.storage.base import LineStorage

logger = logging.getLogger(__name__)


class TransactionRepository:
    """Repository for Transaction data access operations.

    The ledger holds every account's entries in one store; there is no
    index, so each lookup is a full scan.
    """

    def __init__(self, storage: LineStorage, policy: DecodePolicy = DecodePolicy.ZERO_FALLBACK):
        """
        Initialize the repository with a line store.

        Args:
            storage: Backing store for ``account_no,type,amount,date`` lines
            policy: How malformed amount fields are handled
        """
        self._storage = storage
        self._policy = policy

    def create(self, txn: Transaction) -> None:
        """
        Append a transaction to the ledger.

        Args:
            txn: The Transaction to store

        Raises:
            StorageError: If the ledger cannot be written
        """
        self._storage.append_line(encode_transaction(txn))
        logger.debug("Logged %s of %s for account %s", txn.type, txn.amount, txn.account_no)

    def find_by_account(self, account_no: str) -> list[Transaction]:
        """
        Find every transaction for an account.

        Args:
            account_no: The account number to search for

        Returns:
            The account's transactions in ledger (chronological) order;
            empty if the ledger does not exist yet

        Raises:
            StorageError: If the ledger exists but cannot be read
            RecordDecodeError: Under the STRICT policy, for a corrupt matching row
        """
        if not self._storage.exists():
            return []
        return [
            decode_transaction(line, self._policy)
            for line in self._storage.read_lines()
            if line and leading_field(line) == account_no
        ]
