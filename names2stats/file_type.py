"""File type classification and labeling.

This module maps raw ``st_mode`` bits to the closed :class:`FileType`
enumeration and turns file types into the labels used in JSONL output.
"""

import stat
from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType


class FileType(IntEnum):
    """Closed set of filesystem object kinds."""

    UNSPECIFIED = 0
    REGULAR = 100
    SYMLINK = 102
    CHAR_DEVICE = 103
    BLOCK_DEVICE = 104
    DIRECTORY = 105
    PIPE = 106
    SOCKET = 109


UNKNOWN_FILE_TYPE_LABEL = "UNKNOWN FILE TYPE"

FILE_TYPE_LABELS: Mapping[int, str] = MappingProxyType(
    {
        FileType.UNSPECIFIED: UNKNOWN_FILE_TYPE_LABEL,
        FileType.REGULAR: "regular file",
        FileType.DIRECTORY: "directory",
        FileType.SYMLINK: "symbolic link",
        FileType.PIPE: "FIFO",
        FileType.SOCKET: "socket",
        FileType.CHAR_DEVICE: "character special",
        FileType.BLOCK_DEVICE: "block special",
    }
)


@dataclass(frozen=True)
class FileMode:
    """Raw ``st_mode`` value with type predicates."""

    mode: int

    def is_regular(self) -> bool:
        return stat.S_ISREG(self.mode)

    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.mode)

    def is_named_pipe(self) -> bool:
        return stat.S_ISFIFO(self.mode)

    def is_socket(self) -> bool:
        return stat.S_ISSOCK(self.mode)

    def is_char_device(self) -> bool:
        return stat.S_ISCHR(self.mode)

    def is_device(self) -> bool:
        return stat.S_ISCHR(self.mode) or stat.S_ISBLK(self.mode)

    def is_block_device(self) -> bool:
        return self.is_device() and not self.is_char_device()

    def to_file_type(self) -> FileType:
        """Classify the mode. The first matching check wins."""
        if self.is_regular():
            return FileType.REGULAR
        if self.is_dir():
            return FileType.DIRECTORY
        if self.is_symlink():
            return FileType.SYMLINK
        if self.is_named_pipe():
            return FileType.PIPE
        if self.is_socket():
            return FileType.SOCKET
        if self.is_char_device():
            return FileType.CHAR_DEVICE
        if self.is_block_device():
            return FileType.BLOCK_DEVICE
        return FileType.UNSPECIFIED


def classify(mode: int) -> FileType:
    """Return the :class:`FileType` for raw ``st_mode`` bits."""
    return FileMode(mode).to_file_type()


class FileTypeLabeler:
    """Total mapping from file type codes to human-readable labels.

    Codes missing from the table get the table's label for
    ``FileType.UNSPECIFIED``, or ``"UNKNOWN FILE TYPE"`` if the table has none.

    Example:
        ```python
        labeler = FileTypeLabeler()
        labeler(FileType.PIPE)  # "FIFO"
        labeler(42)  # "UNKNOWN FILE TYPE"
        ```
    """

    def __init__(self, labels: Mapping[int, str] | None = None):
        self._labels = FILE_TYPE_LABELS if labels is None else labels

    def __call__(self, file_type: int) -> str:
        label = self._labels.get(file_type)
        if label is not None:
            return label
        return self._labels.get(FileType.UNSPECIFIED, UNKNOWN_FILE_TYPE_LABEL)


DEFAULT_LABELER = FileTypeLabeler()
