"""Bulk stat for names inside a sandboxed root directory.

This package resolves a stream of relative names to size, modification time
and file type, strictly within one root directory, and writes the results as
JSON Lines without holding the result set in memory.
"""

from names2stats.config import Settings
from names2stats.encoder import JSONLEncoder
from names2stats.exceptions import (
    ConfigMissingError,
    EncodeFailureError,
    NameNotFoundError,
    Names2StatsError,
    PathEscapesRootError,
    RootUnavailableError,
    StatUnavailableError,
)
from names2stats.file_type import (
    DEFAULT_LABELER,
    FILE_TYPE_LABELS,
    UNKNOWN_FILE_TYPE_LABEL,
    FileMode,
    FileType,
    FileTypeLabeler,
    classify,
)
from names2stats.names import reader_to_names
from names2stats.pipeline import names_to_jsonl
from names2stats.protocols import DEFAULT_BUFFER_SIZE, StatResolver, TextSink
from names2stats.root import SandboxRoot
from names2stats.stream import collect_stats, names_to_stats
from names2stats.types import BasicStat, BasicStatRecord, StatResult

__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "DEFAULT_LABELER",
    "FILE_TYPE_LABELS",
    "UNKNOWN_FILE_TYPE_LABEL",
    "BasicStat",
    "BasicStatRecord",
    "ConfigMissingError",
    "EncodeFailureError",
    "FileMode",
    "FileType",
    "FileTypeLabeler",
    "JSONLEncoder",
    "NameNotFoundError",
    "Names2StatsError",
    "PathEscapesRootError",
    "RootUnavailableError",
    "SandboxRoot",
    "Settings",
    "StatResolver",
    "StatResult",
    "StatUnavailableError",
    "TextSink",
    "classify",
    "collect_stats",
    "names_to_jsonl",
    "names_to_stats",
    "reader_to_names",
]
