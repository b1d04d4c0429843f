"""Builds the list of sources from configuration."""

import logging

from .config import ConfigManager, Settings
from .sources import BUILTIN_SOURCES, DynamicSource, Source

logger = logging.getLogger(__name__)


def build_sources(
    settings: Settings, manager: ConfigManager | None = None
) -> list[Source]:
    """Instantiate the built-in sources named in settings plus enabled sites."""
    sources: list[Source] = []
    for name in settings.sources:
        source_cls = BUILTIN_SOURCES.get(name)
        if source_cls is None:
            logger.warning("Unknown source %r in settings, skipping", name)
            continue
        sources.append(source_cls(max_results=settings.max_results))

    manager = manager or ConfigManager()
    taken = {s.name for s in sources}
    for key, site in manager.load_enabled().items():
        if site.name in taken:
            logger.warning("Site %r shadows source %r, skipping", key, site.name)
            continue
        sources.append(DynamicSource(site, max_results=settings.max_results))
        taken.add(site.name)

    return sources
