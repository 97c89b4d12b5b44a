"""Shared test fixtures and fake collaborators for names2stats tests."""

import io
import os
from pathlib import Path

import anyio
import pytest

from names2stats import BasicStat, FileType, NameNotFoundError, StatUnavailableError

# 2024-01-02T03:04:05.678901Z
FIXED_MICROS = 1_704_164_645_678_901


# --- Fake collaborators ---


class FakeResolver:
    """Resolver backed by a dict that records which names were asked for."""

    def __init__(self, stats: dict[str, BasicStat] | None = None) -> None:
        self.stats = stats or {}
        self.calls: list[str] = []

    async def resolve(self, name: str) -> BasicStat:
        self.calls.append(name)
        try:
            return self.stats[name].with_path(name)
        except KeyError:
            raise NameNotFoundError(name) from None


class CountingNames:
    """Sync iterable of names that records how many were pulled."""

    def __init__(self, names: list[str]) -> None:
        self.names = names
        self.pulled = 0

    def __iter__(self):
        for name in self.names:
            self.pulled += 1
            yield name


class RecordingSink:
    """Text sink that keeps writes and counts flushes."""

    def __init__(self) -> None:
        self.writes: list[str] = []
        self.flushes = 0

    async def write(self, data: str) -> int:
        self.writes.append(data)
        return len(data)

    async def flush(self) -> None:
        self.flushes += 1

    @property
    def text(self) -> str:
        return "".join(self.writes)


class FailingSink(RecordingSink):
    """Text sink whose writes fail."""

    async def write(self, data: str) -> int:
        raise OSError(28, "No space left on device")


def make_stat(size: int = 0, file_type: FileType = FileType.REGULAR, modified: int = FIXED_MICROS) -> BasicStat:
    return BasicStat(size=size, modified=modified, file_type=file_type)


def failing_stat(name: str) -> StatUnavailableError:
    return StatUnavailableError(name, "Permission denied")


# --- Fixtures ---


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Sandbox root with a few files, a subdirectory and symlinks.

    Layout::

        outside.txt
        root/
            a.txt          (5 bytes)
            b.txt          (0 bytes)
            sub/
                c.bin      (3 bytes)
            link-in  -> a.txt
            link-out -> ../outside.txt
    """
    (tmp_path / "outside.txt").write_text("secret")
    root = tmp_path / "root"
    root.mkdir()
    (root / "a.txt").write_text("hello")
    (root / "b.txt").write_text("")
    (root / "sub").mkdir()
    (root / "sub" / "c.bin").write_bytes(b"\x00\x01\x02")
    os.symlink("a.txt", root / "link-in")
    os.symlink(os.path.join("..", "outside.txt"), root / "link-out")
    return root


@pytest.fixture
def string_sink() -> anyio.AsyncFile[str]:
    return anyio.wrap_file(io.StringIO())
