"""Concurrent fan-out of a query to all sources."""

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from .config.schema import DEFAULT_TIMEOUT
from .errors import AdapterFailure
from .models import Result
from .sources import Source

logger = logging.getLogger(__name__)

LOADING = "loading"
DONE = "done"
ERROR = "error"
TIMEOUT = "timeout"


@dataclass
class SourceUpdate:
    """An update about one source during a search."""

    source: str
    status: str  # "loading", "done", "error", "timeout"
    results: list[Result] = field(default_factory=list)
    raw_count: int = 0
    error: str | None = None
    elapsed: float = 0.0

    @property
    def failed(self) -> bool:
        return self.status in (ERROR, TIMEOUT)


@dataclass
class Aggregation:
    """Merged results of one query, in source completion order."""

    results: list[Result] = field(default_factory=list)
    updates: list[SourceUpdate] = field(default_factory=list)

    @property
    def failed_sources(self) -> list[str]:
        return [u.source for u in self.updates if u.failed]

    @property
    def succeeded_sources(self) -> list[str]:
        return [u.source for u in self.updates if not u.failed]

    @property
    def all_failed(self) -> bool:
        """True when there were sources and every one of them failed."""
        return bool(self.updates) and all(u.failed for u in self.updates)


class Aggregator:
    """Runs a query against every source at once and merges the results.

    A source that raises, times out, or returns something that cannot be
    normalized contributes no results. It never fails the whole query.
    """

    def __init__(
        self, sources: Sequence[Source], timeout: float | None = DEFAULT_TIMEOUT
    ):
        self.sources = list(sources)
        self.timeout = timeout

    async def aggregate(
        self, query: str, on_update: Callable[[SourceUpdate], Any] | None = None
    ) -> Aggregation:
        """Collect normalized results from all sources.

        ``on_update`` is called with every update from ``stream``, including
        the initial loading ones.
        """
        aggregation = Aggregation()
        async for update in self.stream(query):
            if on_update is not None:
                on_update(update)
            if update.status == LOADING:
                continue
            aggregation.updates.append(update)
            aggregation.results.extend(update.results)
        return aggregation

    async def stream(self, query: str) -> AsyncIterator[SourceUpdate]:
        """Yield a loading update per source, then one update as each settles."""
        if not query or not query.strip():
            return

        queue: asyncio.Queue[SourceUpdate] = asyncio.Queue()

        async def search_source(source: Source) -> None:
            await queue.put(await self._run(source, query))

        logger.debug("Dispatching %r to %d sources", query, len(self.sources))
        tasks = [asyncio.create_task(search_source(s)) for s in self.sources]
        try:
            for source in self.sources:
                yield SourceUpdate(source=source.name, status=LOADING)

            for _ in range(len(tasks)):
                yield await queue.get()
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _run(self, source: Source, query: str) -> SourceUpdate:
        """Search one source, capturing any failure as an update."""
        start = time.monotonic()
        try:
            raw, error = await asyncio.wait_for(
                _capture(source.search(query)), self.timeout
            )
        except asyncio.TimeoutError:
            reason = f"timed out after {self.timeout:g}s"
            return self._failed(AdapterFailure(source.name, reason), TIMEOUT, start)
        if error is not None:
            return self._failed(AdapterFailure(source.name, _describe(error)), ERROR, start)

        try:
            raw = list(raw or [])
            results = self._normalize(source, raw)
        except Exception as e:
            failure = AdapterFailure(source.name, f"normalize failed: {_describe(e)}")
            return self._failed(failure, ERROR, start)

        elapsed = time.monotonic() - start
        logger.debug(
            "%s: %d results (%d raw) in %.2fs",
            source.name,
            len(results),
            len(raw),
            elapsed,
        )
        return SourceUpdate(
            source=source.name,
            status=DONE,
            results=results,
            raw_count=len(raw),
            elapsed=elapsed,
        )

    @staticmethod
    def _normalize(source: Source, raw: Iterable[Any]) -> list[Result]:
        results = []
        for record in raw:
            result = source.normalize(record)
            if result is not None:
                results.append(result)
        return results

    @staticmethod
    def _failed(failure: AdapterFailure, status: str, start: float) -> SourceUpdate:
        logger.warning("Source %s failed: %s", failure.source, failure.reason)
        return SourceUpdate(
            source=failure.source,
            status=status,
            error=failure.reason,
            elapsed=time.monotonic() - start,
        )


def _describe(error: Exception) -> str:
    message = str(error)
    return f"{type(error).__name__}: {message}" if message else type(error).__name__


async def _capture(coro: Awaitable[Any]) -> tuple[Any, Exception | None]:
    """Await an adapter call, returning its error instead of raising it.

    Keeps an adapter's own ``TimeoutError`` apart from the per-source deadline.
    """
    try:
        return await coro, None
    except Exception as e:
        return None, e
