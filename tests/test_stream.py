"""Tests for names_to_stats and collect_stats."""

from collections.abc import AsyncIterator
from contextlib import aclosing
from pathlib import Path

import pytest

from names2stats import (
    FileType,
    NameNotFoundError,
    PathEscapesRootError,
    SandboxRoot,
    collect_stats,
    names_to_stats,
)

from .conftest import CountingNames, FakeResolver, make_stat


async def test_one_result_per_name_in_order() -> None:
    """Results should follow input order, one per name."""
    resolver = FakeResolver({"a": make_stat(1), "b": make_stat(2), "c": make_stat(3)})

    results = [r async for r in names_to_stats(["c", "a", "b"], resolver)]

    assert [r.stat.path for r in results] == ["c", "a", "b"]  # type: ignore[union-attr]
    assert [r.stat.size for r in results] == [3, 1, 2]  # type: ignore[union-attr]
    assert all(r.ok for r in results)


async def test_errors_are_returned_not_raised() -> None:
    """A failed name should produce an error result and keep the stream usable."""
    resolver = FakeResolver({"a": make_stat(), "c": make_stat()})

    results = [r async for r in names_to_stats(["a", "b", "c"], resolver)]

    assert len(results) == 3
    assert results[0].ok
    assert results[1].stat is None
    assert isinstance(results[1].error, NameNotFoundError)
    assert results[1].error.path == "b"
    assert results[2].ok


async def test_async_name_source() -> None:
    """Async iterables of names should be accepted."""

    async def names() -> AsyncIterator[str]:
        for name in ["a", "b"]:
            yield name

    resolver = FakeResolver({"a": make_stat(), "b": make_stat()})
    results = [r async for r in names_to_stats(names(), resolver)]

    assert [r.stat.path for r in results] == ["a", "b"]  # type: ignore[union-attr]


async def test_stream_is_lazy() -> None:
    """Nothing should be pulled or resolved before the consumer asks."""
    names = CountingNames(["a", "b", "c"])
    resolver = FakeResolver({n: make_stat() for n in names.names})

    async with aclosing(names_to_stats(names, resolver)) as results:
        assert names.pulled == 0
        assert resolver.calls == []

        first = await results.__anext__()
        assert first.stat.path == "a"  # type: ignore[union-attr]
        assert names.pulled == 1
        assert resolver.calls == ["a"]

    assert names.pulled == 1
    assert resolver.calls == ["a"]


async def test_empty_names() -> None:
    assert [r async for r in names_to_stats([], FakeResolver())] == []


async def test_collect_stats() -> None:
    resolver = FakeResolver({"a": make_stat(1), "b": make_stat(2)})

    stats = await collect_stats(names_to_stats(["a", "b"], resolver))

    assert [s.path for s in stats] == ["a", "b"]
    assert [s.size for s in stats] == [1, 2]


async def test_collect_stats_stops_at_first_error() -> None:
    """collect_stats should raise the first error and resolve nothing after it."""
    resolver = FakeResolver({"a": make_stat(), "c": make_stat()})

    with pytest.raises(NameNotFoundError) as exc_info:
        await collect_stats(names_to_stats(["a", "b", "c", "d"], resolver))

    assert exc_info.value.path == "b"
    assert resolver.calls == ["a", "b"]


async def test_stream_with_sandbox_root(tree: Path) -> None:
    """The stream should work against a real root directory."""
    async with SandboxRoot(tree) as root:
        results = [r async for r in names_to_stats(["a.txt", "sub", "../outside.txt"], root)]

    assert results[0].stat.file_type == FileType.REGULAR  # type: ignore[union-attr]
    assert results[1].stat.file_type == FileType.DIRECTORY  # type: ignore[union-attr]
    assert isinstance(results[2].error, PathEscapesRootError)
