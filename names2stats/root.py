"""Sandboxed root directory for name resolution.

This module provides :class:`SandboxRoot`, an owned directory handle that
resolves relative names to :class:`BasicStat` records without letting any
lookup leave the directory subtree.
"""

import errno
import os
import stat
from collections import deque
from functools import partial

import anyio
from loguru import logger
from typing_extensions import Self

from names2stats.exceptions import (
    NameNotFoundError,
    PathEscapesRootError,
    RootUnavailableError,
    StatUnavailableError,
)
from names2stats.types import BasicStat

_O_DIRECTORY = getattr(os, "O_DIRECTORY", 0)
_O_NOFOLLOW = getattr(os, "O_NOFOLLOW", 0)
# Same limit as Linux MAXSYMLINKS.
_MAX_SYMLINKS = 40


class SandboxRoot:
    """Directory handle that bounds all path resolution.

    The handle is opened once and released exactly once. Use it as an async
    context manager so that release also happens when resolution or the
    consumer fails.

    Containment rules:
        - Absolute names are rejected.
        - ``..`` segments are allowed while the result stays inside the root.
        - Symlinks are followed only while their targets stay inside the root.
          Absolute link targets are rejected.
          With ``follow_symlinks=False`` the final component is not
          dereferenced and a link is reported as a symbolic link.

    Example:
        ```python
        async with SandboxRoot("/srv/data") as root:
            stat = await root.resolve("reports/2024.csv")
            print(stat.size)
        ```
    """

    def __init__(self, root_path: str | os.PathLike[str], *, follow_symlinks: bool = True):
        """Initialize SandboxRoot.

        Args:
            root_path: Directory that bounds resolution. Not touched until
                :meth:`open` is called.
            follow_symlinks: If False, the last component of each name is
                stat'ed without following it.
        """
        self._root_path = os.fspath(root_path)
        self._follow_symlinks = follow_symlinks
        self._fd: int | None = None

    @property
    def root_path(self) -> str:
        return self._root_path

    @property
    def is_open(self) -> bool:
        return self._fd is not None

    async def open(self) -> Self:
        """Open the root directory.

        Raises:
            RootUnavailableError: If the directory does not exist, is not a
                directory, cannot be opened, or this root is already open.
        """
        if self._fd is not None:
            raise RootUnavailableError(self._root_path, "already open")
        try:
            self._fd = await anyio.to_thread.run_sync(os.open, self._root_path, os.O_RDONLY | _O_DIRECTORY)
        except OSError as e:
            raise RootUnavailableError(self._root_path, e.strerror or str(e)) from e
        logger.debug(f"Opened root directory {self._root_path}")
        return self

    async def close(self) -> None:
        """Release the root handle. Safe to call more than once."""
        fd, self._fd = self._fd, None
        if fd is None:
            return
        os.close(fd)
        logger.debug(f"Closed root directory {self._root_path}")

    async def resolve(self, name: str) -> BasicStat:
        """Return metadata for ``name``, resolved relative to the root.

        Every component is looked up through the open handle, so the result
        stays inside the opened directory even if the path it was opened
        from is later renamed or replaced.

        Args:
            name: Path relative to the root directory.

        Returns:
            BasicStat whose ``path`` is ``name`` exactly as given.

        Raises:
            RootUnavailableError: If the root is not open.
            PathEscapesRootError: If ``name`` resolves outside the root.
            NameNotFoundError: If nothing exists at ``name``.
            StatUnavailableError: For any other failure to read metadata.
        """
        if self._fd is None:
            raise RootUnavailableError(self._root_path, "not open")
        st = await anyio.to_thread.run_sync(partial(self._stat, self._fd, name))
        return BasicStat.from_stat_result(st).with_path(name)

    def _walk(self, root_fd: int, name: str) -> os.stat_result:
        """Stat ``name`` one component at a time, starting at ``root_fd``.

        ``stack`` holds the directories entered below the root; ``..`` pops
        it and may never pop the root itself.
        """
        if not name:
            raise NameNotFoundError(name)
        if os.path.isabs(name):
            raise PathEscapesRootError(name, self._root_path)

        pending = deque(part for part in name.split("/") if part not in ("", "."))
        stack: list[int] = []
        links = 0
        try:
            while pending:
                part = pending.popleft()
                if part == "..":
                    if not stack:
                        raise PathEscapesRootError(name, self._root_path)
                    os.close(stack.pop())
                    continue

                cur = stack[-1] if stack else root_fd
                st = os.stat(part, dir_fd=cur, follow_symlinks=False)
                if stat.S_ISLNK(st.st_mode) and (pending or self._follow_symlinks):
                    links += 1
                    if links > _MAX_SYMLINKS:
                        raise OSError(errno.ELOOP, os.strerror(errno.ELOOP), name)
                    target = os.readlink(part, dir_fd=cur)
                    if os.path.isabs(target):
                        raise PathEscapesRootError(name, self._root_path)
                    parts = [p for p in target.split("/") if p not in ("", ".")]
                    pending.extendleft(reversed(parts))
                    continue
                if not pending:
                    return st
                stack.append(os.open(part, os.O_RDONLY | _O_DIRECTORY | _O_NOFOLLOW, dir_fd=cur))

            return os.stat(".", dir_fd=stack[-1] if stack else root_fd)
        finally:
            for fd in stack:
                os.close(fd)

    def _stat(self, root_fd: int, name: str) -> os.stat_result:
        try:
            return self._walk(root_fd, name)
        except FileNotFoundError as e:
            raise NameNotFoundError(name) from e
        except OSError as e:
            raise StatUnavailableError(name, e.strerror or str(e)) from e
        except ValueError as e:
            raise StatUnavailableError(name, str(e)) from e

    async def __aenter__(self) -> Self:
        return await self.open()

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
