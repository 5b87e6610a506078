"""Line-oriented storage backends for the flat-file bank."""

from .base import LineStorage
from .file_storage import FileStorage
from .memory_storage import MemoryStorage

__all__ = [
    "LineStorage",
    "FileStorage",
    "MemoryStorage",
]
