"""Protocol definitions for names2stats.

This module defines runtime-checkable protocols for the pipeline's
collaborators, so that stages can be wired to other resolvers or sinks.
"""

from typing import Any, Protocol, runtime_checkable

from names2stats.types import BasicStat

# Default write buffer size for the JSONL encoder (4KB)
DEFAULT_BUFFER_SIZE = 4096


@runtime_checkable
class StatResolver(Protocol):
    """Protocol for objects that turn a name into a :class:`BasicStat`.

    Implementations raise a ``Names2StatsError`` subclass when a name cannot
    be resolved. :class:`names2stats.root.SandboxRoot` is the standard one.

    Example:
        class InMemoryResolver:
            def __init__(self, stats: dict[str, BasicStat]):
                self._stats = stats

            async def resolve(self, name: str) -> BasicStat:
                try:
                    return self._stats[name]
                except KeyError:
                    raise NameNotFoundError(name) from None
    """

    async def resolve(self, name: str) -> BasicStat:
        """Return metadata for ``name``."""
        ...


@runtime_checkable
class TextSink(Protocol):
    """Protocol for asynchronous text outputs.

    ``anyio.AsyncFile`` objects returned by ``anyio.wrap_file`` or
    ``anyio.open_file`` in text mode satisfy this protocol.
    """

    async def write(self, data: str) -> Any:
        """Write ``data`` to the output."""
        ...

    async def flush(self) -> None:
        """Flush any output buffered by the sink itself."""
        ...
