"""End-to-end names -> stats -> JSONL pipeline."""

import os
from collections.abc import AsyncIterable, Iterable
from contextlib import aclosing
from datetime import timezone, tzinfo

from names2stats.encoder import JSONLEncoder
from names2stats.file_type import DEFAULT_LABELER, FileTypeLabeler
from names2stats.protocols import DEFAULT_BUFFER_SIZE, TextSink
from names2stats.root import SandboxRoot
from names2stats.stream import names_to_stats


async def names_to_jsonl(
    root_dir: str | os.PathLike[str],
    names: Iterable[str] | AsyncIterable[str],
    sink: TextSink,
    *,
    follow_symlinks: bool = True,
    labeler: FileTypeLabeler = DEFAULT_LABELER,
    tz: tzinfo | None = timezone.utc,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> int:
    """Stat every name under ``root_dir`` and write the records to ``sink``.

    The root is opened before the first name is read and closed on every exit
    path. The first failure stops the run and is raised; lines written before
    it are kept.

    Args:
        root_dir: Sandbox root directory.
        names: Names relative to ``root_dir``.
        sink: Text output for the JSONL lines.
        follow_symlinks: Passed to :class:`SandboxRoot`.
        labeler: Passed to :class:`JSONLEncoder`.
        tz: Passed to :class:`JSONLEncoder`.
        buffer_size: Passed to :class:`JSONLEncoder`.

    Returns:
        Number of records written.
    """
    encoder = JSONLEncoder(sink, labeler=labeler, tz=tz, buffer_size=buffer_size)
    async with SandboxRoot(root_dir, follow_symlinks=follow_symlinks) as root:
        async with aclosing(names_to_stats(names, root)) as results:
            return await encoder.encode(results)
