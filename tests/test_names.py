"""Tests for reader_to_names."""

import io

import anyio

from names2stats import reader_to_names
from names2stats.names import decode_name


def test_decode_name_strips_terminators() -> None:
    assert decode_name(b"a.txt\n") == "a.txt"
    assert decode_name(b"a.txt\r\n") == "a.txt"
    assert decode_name(b"a.txt") == "a.txt"
    assert decode_name(b" spaced name \n") == " spaced name "


def test_decode_name_keeps_undecodable_bytes() -> None:
    """Invalid UTF-8 should survive decoding so the name still matches on disk."""
    name = decode_name(b"caf\xe9\n")
    assert name.encode("utf-8", "surrogateescape") == b"caf\xe9"


async def test_reader_to_names() -> None:
    reader = anyio.wrap_file(io.BytesIO(b"a.txt\nsub/c.bin\r\n\nlast"))

    names = [name async for name in reader_to_names(reader)]

    assert names == ["a.txt", "sub/c.bin", "last"]


async def test_reader_to_names_empty() -> None:
    reader = anyio.wrap_file(io.BytesIO(b""))
    assert [name async for name in reader_to_names(reader)] == []
