"""Newline-delimited name sources."""

import os
from collections.abc import AsyncIterable, AsyncIterator


def decode_name(line: bytes) -> str:
    """Strip the line terminator and decode like the filesystem does."""
    if line.endswith(b"\n"):
        line = line[:-1]
    if line.endswith(b"\r"):
        line = line[:-1]
    return os.fsdecode(line)


async def reader_to_names(reader: AsyncIterable[bytes]) -> AsyncIterator[str]:
    """Yield one name per line of ``reader``, skipping blank lines.

    Lines are read lazily, so an arbitrarily long input is never held in
    memory. Undecodable bytes are kept via ``os.fsdecode`` so the name still
    reaches the filesystem unchanged.

    Args:
        reader: Binary line source, e.g. ``anyio.wrap_file(sys.stdin.buffer)``.

    Yields:
        Names with line terminators removed.
    """
    async for line in reader:
        name = decode_name(line)
        if name:
            yield name
