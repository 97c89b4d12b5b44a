"""JSON Lines encoder for stat results.

This module writes :class:`BasicStat` records as one JSON object per line,
stopping at the first error in the result stream.
"""

from collections.abc import AsyncIterable
from datetime import timezone, tzinfo

from loguru import logger

from names2stats.exceptions import EncodeFailureError
from names2stats.file_type import DEFAULT_LABELER, FileTypeLabeler
from names2stats.protocols import DEFAULT_BUFFER_SIZE, TextSink
from names2stats.types import BasicStat, StatResult


class _LineBuffer:
    """Accumulates lines and hands them to the sink in chunks."""

    def __init__(self, sink: TextSink, size: int):
        self._sink = sink
        self._size = size
        self._parts: list[str] = []
        self._pending = 0

    async def write(self, line: str) -> None:
        self._parts.append(line)
        self._pending += len(line)
        if self._pending >= self._size:
            await self._drain()

    async def _drain(self) -> None:
        if not self._parts:
            return
        data = "".join(self._parts)
        self._parts.clear()
        self._pending = 0
        try:
            await self._sink.write(data)
        except OSError as e:
            raise EncodeFailureError(e.strerror or str(e)) from e

    async def flush(self) -> None:
        await self._drain()
        try:
            await self._sink.flush()
        except OSError as e:
            raise EncodeFailureError(e.strerror or str(e)) from e


class JSONLEncoder:
    """Writes stat results to a text sink as JSON Lines.

    Each successful record becomes one compact JSON object with the keys
    ``path``, ``size``, ``modified_time`` and ``file_type``. Encoding stops at
    the first error result and that error is raised; lines written before it
    stay in the sink. Buffered output is flushed whether encoding finishes or
    fails.

    Example:
        ```python
        async with SandboxRoot("/srv/data") as root:
            stdout = anyio.wrap_file(sys.stdout)
            await JSONLEncoder(stdout).encode(names_to_stats(["a.txt"], root))
        ```
    """

    def __init__(
        self,
        sink: TextSink,
        *,
        labeler: FileTypeLabeler = DEFAULT_LABELER,
        tz: tzinfo | None = timezone.utc,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
    ):
        """Initialize JSONLEncoder.

        Args:
            sink: Text output to write lines to.
            labeler: Maps file type codes to the ``file_type`` label.
            tz: Timezone for ``modified_time``. None means local time.
            buffer_size: Number of characters collected before writing to
                the sink.
        """
        self._sink = sink
        self._labeler = labeler
        self._tz = tz
        self._buffer_size = buffer_size

    def encode_line(self, stat: BasicStat) -> str:
        """Return the JSONL line for ``stat``, including the newline."""
        try:
            return stat.to_record(self._labeler, self._tz).model_dump_json() + "\n"
        except (ValueError, OverflowError) as e:
            raise EncodeFailureError(str(e), stat.path) from e

    async def encode(self, results: AsyncIterable[StatResult]) -> int:
        """Write every record in ``results`` until exhausted or an error.

        Args:
            results: Stat results, pulled one at a time.

        Returns:
            Number of lines written.

        Raises:
            Names2StatsError: The first error result, unchanged. A sink
                failure while flushing after it is logged, not raised.
            EncodeFailureError: If a record cannot be serialized or the sink
                fails.
        """
        buffer = _LineBuffer(self._sink, self._buffer_size)
        written = 0
        try:
            async for stat, error in results:
                if error is not None:
                    raise error
                await buffer.write(self.encode_line(stat))  # type: ignore[arg-type]
                written += 1
        except BaseException:
            try:
                await buffer.flush()
            except EncodeFailureError as e:
                logger.warning(f"Dropped flush failure after earlier error: {e}")
            raise
        else:
            await buffer.flush()
        finally:
            logger.debug(f"Encoded {written} records")
        return written
