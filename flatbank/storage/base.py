"""Storage interface shared by the record store, ledger and allocator."""

from abc import ABC, abstractmethod


class LineStorage(ABC):
    """A newline-delimited text store.

    Lines are handed out and accepted without their terminator. Blank lines
    are content like any other and must survive a read/rewrite cycle.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Return True if the backing store has been created."""

    @abstractmethod
    def read_lines(self) -> list[str]:
        """
        Read every line in the store.

        Returns:
            The lines in order, without their terminators

        Raises:
            StorageError: If the store is absent or cannot be read
        """

    @abstractmethod
    def append_line(self, line: str) -> None:
        """
        Append a single line, creating the store if needed.

        Raises:
            StorageError: If the store cannot be written
        """

    @abstractmethod
    def rewrite(self, lines: list[str]) -> None:
        """
        Replace the whole store with the given lines.

        Raises:
            StorageError: If the store cannot be written
        """
