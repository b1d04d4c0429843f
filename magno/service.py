"""Aggregation service: the entry point used by the API, CLI and TUI."""

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any

from .aggregator import Aggregation, Aggregator, SourceUpdate
from .config import ConfigManager, Settings
from .config.schema import DEFAULT_TIMEOUT
from .errors import InvalidQuery
from .models import Result
from .ranker import rank
from .registry import build_sources
from .sources import Source

logger = logging.getLogger(__name__)


def validate_query(query: Any) -> str:
    """Return the stripped query or raise InvalidQuery."""
    if not isinstance(query, str) or not query.strip():
        raise InvalidQuery()
    return query.strip()


class AggregationService:
    """Validates queries, aggregates all sources and ranks the results."""

    def __init__(
        self, sources: Sequence[Source], timeout: float | None = DEFAULT_TIMEOUT
    ):
        self.aggregator = Aggregator(sources, timeout=timeout)

    @classmethod
    def from_settings(
        cls, settings: Settings, manager: ConfigManager | None = None
    ) -> "AggregationService":
        """Build a service with the sources named in settings."""
        return cls(build_sources(settings, manager), timeout=settings.timeout)

    @property
    def source_names(self) -> list[str]:
        return [s.name for s in self.aggregator.sources]

    async def handle(self, query: Any) -> list[Result]:
        """Search all sources and return results ranked by seeds."""
        report = await self.handle_with_report(query)
        return report.results

    async def handle_with_report(
        self, query: Any, on_update: Callable[[SourceUpdate], Any] | None = None
    ) -> Aggregation:
        """Like ``handle`` but also return the per-source updates.

        ``on_update`` receives each source's status as it changes.
        """
        query = validate_query(query)
        aggregation = await self.aggregator.aggregate(query, on_update=on_update)
        aggregation.results = rank(aggregation.results)
        if aggregation.all_failed:
            logger.warning("All sources failed for %r", query)
        logger.info(
            "%r: %d results from %d/%d sources",
            query,
            len(aggregation.results),
            len(aggregation.succeeded_sources),
            len(aggregation.updates),
        )
        return aggregation

    def handle_sync(self, query: Any) -> list[Result]:
        """Blocking version of ``handle``."""
        return asyncio.run(self.handle(query))
