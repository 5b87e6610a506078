"""Allocator for sequential account numbers."""

import logging

from flatbank.models.exceptions import StorageError
from flatbank.storage.base import LineStorage

logger = logging.getLogger(__name__)


class AccountNumberRepository:
    """Issues account numbers from a persisted counter.

    The store holds a single integer: the last number handed out. Only one
    caller may use it at a time.
    """

    def __init__(self, storage: LineStorage, start: int = 1000):
        """
        Initialize the allocator.

        Args:
            storage: Backing store for the counter
            start: Value assumed when the counter is absent or unreadable;
                the first issued number is ``start + 1``
        """
        self._storage = storage
        self._start = start

    def peek(self) -> int:
        """Return the last issued number without advancing the counter."""
        if not self._storage.exists():
            return self._start
        try:
            lines = self._storage.read_lines()
        except StorageError:
            return self._start
        text = lines[0].strip() if lines else ""
        try:
            return int(text)
        except ValueError:
            logger.warning("Account number counter holds %r, restarting from %d", text, self._start)
            return self._start

    def next_account_number(self) -> str:
        """
        Advance the counter and return the new account number.

        A failed counter write is logged but does not fail the call, so the
        same number can be issued again after a restart.

        Returns:
            The new account number as a decimal string
        """
        new_number = self.peek() + 1
        try:
            self._storage.rewrite([str(new_number)])
        except StorageError:
            logger.error("Could not persist account number %d", new_number)
        return str(new_number)
