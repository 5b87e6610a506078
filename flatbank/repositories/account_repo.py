"""Account repository backed by the flat account store."""

import logging

from flatbank.models.account import AccountRecord
from flatbank.models.exceptions import AccountNotFoundError
from flatbank.repositories.codec import (
    DecodePolicy,
    decode_account,
    encode_account,
    leading_field,
)
from flatbank.storage.base import LineStorage

logger = logging.getLogger(__name__)


class AccountRepository:
    """Repository for AccountRecord data access operations.

    One line per account. Lookups scan the whole store; updates read every
    line, replace the matching one and rewrite the store.
    """

    def __init__(self, storage: LineStorage, policy: DecodePolicy = DecodePolicy.ZERO_FALLBACK):
        """
        Initialize the repository with a line store.

        Args:
            storage: Backing store for ``account_no,name,balance,pin_hash`` lines
            policy: How malformed balance/pin_hash fields are handled
        """
        self._storage = storage
        self._policy = policy

    def create(self, record: AccountRecord) -> None:
        """
        Append a new account line.

        The account number is not checked for uniqueness; the allocator is
        trusted to never repeat one.

        Args:
            record: The AccountRecord to store

        Raises:
            StorageError: If the store cannot be written
        """
        self._storage.append_line(encode_account(record))
        logger.info("Stored account %s", record.account_no)

    def find_by_account_no(self, account_no: str) -> AccountRecord | None:
        """
        Find an account by account number.

        Args:
            account_no: The account number to search for

        Returns:
            The first matching AccountRecord, or None if there is none

        Raises:
            StorageError: If the store exists but cannot be read
            RecordDecodeError: Under the STRICT policy, for a corrupt matching row
        """
        if not self._storage.exists():
            return None
        for line in self._storage.read_lines():
            if not line:
                continue
            if leading_field(line) == account_no:
                return decode_account(line, self._policy)
        return None

    def find_all(self) -> list[AccountRecord]:
        """
        Return every account in store order.

        Raises:
            StorageError: If the store exists but cannot be read
        """
        if not self._storage.exists():
            return []
        return [decode_account(line, self._policy) for line in self._storage.read_lines() if line]

    def exists(self, account_no: str) -> bool:
        """
        Check if an account exists.

        Args:
            account_no: The account number to check

        Returns:
            True if the account exists, False otherwise
        """
        if not self._storage.exists():
            return False
        return any(
            line and leading_field(line) == account_no for line in self._storage.read_lines()
        )

    def update(self, record: AccountRecord) -> None:
        """
        Rewrite the stored line for an account.

        Every other line, blank lines included, is written back unchanged.

        Args:
            record: The AccountRecord with its new balance

        Raises:
            AccountNotFoundError: If no line carries the account number
            StorageError: If the store cannot be read or rewritten
        """
        lines = self._storage.read_lines()
        encoded = encode_account(record)
        matched = 0
        for i, line in enumerate(lines):
            if line and leading_field(line) == record.account_no:
                lines[i] = encoded
                matched += 1

        if matched == 0:
            raise AccountNotFoundError(f"Account {record.account_no} not found")
        if matched > 1:
            logger.warning(
                "Account %s appears on %d lines; all were rewritten", record.account_no, matched
            )

        self._storage.rewrite(lines)
        logger.debug("Updated account %s", record.account_no)
