"""Base class for torrent sources."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import quote

import requests

from ..models import Result
from ..normalize import DEFAULT_FIELDS, FieldMap, normalize

logger = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
}
TIMEOUT = 15
MAX_RESULTS = 30

TRACKERS = [
    "udp://tracker.opentrackr.org:1337/announce",
    "udp://open.stealth.si:80/announce",
    "udp://tracker.torrent.eu.org:451/announce",
    "udp://tracker.bittor.pw:1337/announce",
    "udp://public.popcorn-tracker.org:6969/announce",
    "udp://tracker.dler.org:6969/announce",
    "udp://exodus.desync.com:6969/announce",
    "udp://open.demonii.com:1337/announce",
]


def add_trackers(magnet: str) -> str:
    """Add public trackers to a magnet link if missing."""
    if not magnet.startswith("magnet:") or "&tr=" in magnet:
        return magnet
    tracker_params = "".join(f"&tr={quote(t, safe='')}" for t in TRACKERS)
    return magnet + tracker_params


def build_magnet(info_hash: str, name: str) -> str:
    """Build a magnet URI from an info hash and display name."""
    return f"magnet:?xt=urn:btih:{info_hash}&dn={quote(name)}"


class Source(ABC):
    """Abstract base class for torrent sources.

    Subclasses implement ``fetch``, a blocking call that returns raw records
    in the site's own shape and raises on any failure. ``search`` is the
    async entry point used by the aggregator.
    """

    name: str = "Unknown"
    fields: FieldMap = DEFAULT_FIELDS

    def __init__(self, max_results: int = MAX_RESULTS):
        self.max_results = max_results

    @abstractmethod
    def fetch(self, query: str) -> list[dict[str, Any]]:
        """Fetch raw records for the query."""
        ...

    async def search(self, query: str) -> list[dict[str, Any]]:
        """Run ``fetch`` in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.fetch, query)

    def normalize(self, raw: dict[str, Any]) -> Result | None:
        """Map one raw record to a Result."""
        return normalize(raw, self.name, self.fields)

    def _get(self, url: str, **kwargs) -> requests.Response:
        """Make a GET request with standard headers."""
        logger.debug("%s: GET %s", self.name, url)
        resp = requests.get(url, headers=HEADERS, timeout=TIMEOUT, **kwargs)
        resp.raise_for_status()
        return resp

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"
