"""Torrent source implementations."""

from .base import Source, add_trackers
from .dynamic import DynamicSource
from .eztv import EztvSource
from .limetorrents import LimeTorrentsSource
from .piratebay import PirateBaySource

BUILTIN_SOURCES: dict[str, type[Source]] = {
    PirateBaySource.name: PirateBaySource,
    LimeTorrentsSource.name: LimeTorrentsSource,
    EztvSource.name: EztvSource,
}

__all__ = [
    "Source",
    "add_trackers",
    "BUILTIN_SOURCES",
    "PirateBaySource",
    "LimeTorrentsSource",
    "EztvSource",
    "DynamicSource",
]
