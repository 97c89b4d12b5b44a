"""Type definitions for names2stats."""

import os
from datetime import datetime, timedelta, timezone, tzinfo
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict

from names2stats.exceptions import Names2StatsError
from names2stats.file_type import DEFAULT_LABELER, FileType, FileTypeLabeler, classify

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def unix_micros_to_datetime(micros: int, tz: tzinfo | None = timezone.utc) -> datetime:
    """Convert microseconds since the Unix epoch to an aware datetime.

    A ``tz`` of None renders the timestamp in the local timezone.
    """
    return (EPOCH + timedelta(microseconds=micros)).astimezone(tz)


class BasicStatRecord(BaseModel):
    """JSON shape of one output line."""

    path: str
    size: int
    modified_time: datetime
    file_type: str


class BasicStat(BaseModel):
    """Metadata for one resolved name."""

    model_config = ConfigDict(frozen=True)

    path: str | None = None
    """Name as supplied by the caller. None until resolved."""
    size: int
    """Size in bytes."""
    modified: int
    """Modification time as microseconds since the Unix epoch."""
    file_type: FileType = FileType.UNSPECIFIED
    """Classified file type."""

    @classmethod
    def from_stat_result(cls, st: os.stat_result) -> "BasicStat":
        """Build a path-less record from raw ``os.stat`` output."""
        return cls(
            size=st.st_size,
            modified=st.st_mtime_ns // 1000,
            file_type=classify(st.st_mode),
        )

    def with_path(self, path: str) -> "BasicStat":
        return self.model_copy(update={"path": path})

    def modified_time(self, tz: tzinfo | None = timezone.utc) -> datetime:
        return unix_micros_to_datetime(self.modified, tz)

    def to_record(
        self,
        labeler: FileTypeLabeler = DEFAULT_LABELER,
        tz: tzinfo | None = timezone.utc,
    ) -> BasicStatRecord:
        if self.path is None:
            raise ValueError("record has no path")
        return BasicStatRecord(
            path=self.path,
            size=self.size,
            modified_time=self.modified_time(tz),
            file_type=labeler(self.file_type),
        )


class StatResult(NamedTuple):
    """Outcome of resolving one name: a record or the error that stopped it."""

    stat: BasicStat | None
    error: Names2StatsError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
