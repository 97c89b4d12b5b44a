"""Pull-based resolution of names into stat results."""

from collections.abc import AsyncIterable, AsyncIterator, Iterable
from contextlib import aclosing

from loguru import logger

from names2stats.exceptions import Names2StatsError
from names2stats.protocols import StatResolver
from names2stats.types import BasicStat, StatResult


async def _iterate(names: Iterable[str] | AsyncIterable[str]) -> AsyncIterator[str]:
    if isinstance(names, AsyncIterable):
        async for name in names:
            yield name
    else:
        for name in names:
            yield name


async def names_to_stats(
    names: Iterable[str] | AsyncIterable[str],
    resolver: StatResolver,
) -> AsyncIterator[StatResult]:
    """Lazily resolve each name into a :class:`StatResult`.

    One result is produced per name, in input order. A name is only read from
    ``names`` and resolved when the consumer asks for its result, so stopping
    iteration leaves the remaining names untouched.

    Resolution errors are returned inside the result rather than raised; the
    consumer decides whether to stop.

    Args:
        names: Names relative to the resolver's root, sync or async.
        resolver: Object used to resolve each name.

    Yields:
        StatResult with either ``stat`` or ``error`` set.
    """
    count = 0
    async with aclosing(_iterate(names)) as iterator:
        async for name in iterator:
            try:
                stat = await resolver.resolve(name)
            except Names2StatsError as e:
                yield StatResult(None, e)
            else:
                yield StatResult(stat)
            count += 1
    logger.debug(f"Resolved {count} names")


async def collect_stats(results: AsyncIterable[StatResult]) -> list[BasicStat]:
    """Drain ``results`` into a list.

    Raises:
        Names2StatsError: The first error in ``results``. Nothing after it is
            consumed.
    """
    stats: list[BasicStat] = []
    async for stat, error in results:
        if error is not None:
            raise error
        stats.append(stat)  # type: ignore[arg-type]
    return stats
