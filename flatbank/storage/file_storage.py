"""File-backed line storage."""

import logging
import os
import stat
import tempfile
from pathlib import Path

from flatbank.models.exceptions import StorageError
from flatbank.storage.base import LineStorage

logger = logging.getLogger(__name__)


class FileStorage(LineStorage):
    """Line storage on a UTF-8 text file. Only "\\n" terminates a line."""

    def __init__(self, path: str | Path):
        """
        Initialize the storage.

        Args:
            path: Location of the backing file; it is created on first write
        """
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"FileStorage({str(self.path)!r})"

    def exists(self) -> bool:
        return self.path.is_file()

    def read_lines(self) -> list[str]:
        try:
            with open(self.path, "r", encoding="utf-8", newline="\n") as fh:
                return [line[:-1] if line.endswith("\n") else line for line in fh]
        except OSError as err:
            logger.error("Error opening %s for reading: %s", self.path, err)
            raise StorageError(f"Error opening {self.path.name} for reading.") from err

    def append_line(self, line: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8", newline="\n") as fh:
                fh.write(line + "\n")
        except OSError as err:
            logger.error("Error opening %s for writing: %s", self.path, err)
            raise StorageError(f"Error opening {self.path.name} for writing.") from err

    def rewrite(self, lines: list[str]) -> None:
        # swap in a fully written sibling so the store is never left truncated
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as fh:
                for line in lines:
                    fh.write(line + "\n")
            if self.path.exists():
                os.chmod(tmp_name, stat.S_IMODE(self.path.stat().st_mode))
            os.replace(tmp_name, self.path)
        except OSError as err:
            logger.error("Error opening %s for writing: %s", self.path, err)
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Error opening {self.path.name} for writing.") from err
