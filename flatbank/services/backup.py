"""Dated copies of the data files."""

import logging
import shutil
from datetime import date
from pathlib import Path

logger = logging.getLogger(__name__)


def backup_files(paths: list[Path], dest_dir: str | Path, today: date | None = None) -> list[Path]:
    """
    Copy each data file into dest_dir with the date appended to its name.

    ``accounts.txt`` backed up on 2026-10-18 becomes ``accounts_10_18_2026.txt``.
    Missing sources are skipped.

    Args:
        paths: Files to back up
        dest_dir: Directory for the copies, created if needed
        today: Date to stamp, defaults to today

    Returns:
        The paths of the copies written
    """
    today = today or date.today()
    date_format = today.strftime("_%m_%d_%Y")
    dest_dir = Path(dest_dir)
    dest_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for src in map(Path, paths):
        if not src.is_file():
            logger.warning("Skipping backup of %s: file does not exist", src)
            continue
        dest = dest_dir / f"{src.stem}{date_format}{src.suffix}"
        shutil.copy2(src, dest)
        written.append(dest)
        logger.info("Backed up %s to %s", src, dest)
    return written
