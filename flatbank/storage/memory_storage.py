"""In-memory line storage, used as a test double for FileStorage."""

from flatbank.models.exceptions import StorageError
from flatbank.storage.base import LineStorage


class MemoryStorage(LineStorage):
    """Keeps lines in a list. ``None`` means the store was never created."""

    def __init__(self, lines: list[str] | None = None):
        self.lines = list(lines) if lines is not None else None
        self.fail_reads = False
        self.fail_writes = False

    def exists(self) -> bool:
        return self.lines is not None

    def read_lines(self) -> list[str]:
        if self.fail_reads or self.lines is None:
            raise StorageError("Error opening store for reading.")
        return list(self.lines)

    def append_line(self, line: str) -> None:
        if self.fail_writes:
            raise StorageError("Error opening store for writing.")
        if self.lines is None:
            self.lines = []
        self.lines.append(line)

    def rewrite(self, lines: list[str]) -> None:
        if self.fail_writes:
            raise StorageError("Error opening store for writing.")
        self.lines = list(lines)

    def dump(self) -> str:
        """Render the store the way FileStorage would write it to disk."""
        if not self.lines:
            return ""
        return "".join(line + "\n" for line in self.lines)
