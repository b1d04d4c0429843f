"""The Pirate Bay torrent source."""

from typing import Any
from urllib.parse import quote_plus

from ..models import Result
from ..normalize import FieldMap, normalize
from .base import Source, build_magnet

# apibay answers a search with no hits with this single placeholder record
NO_RESULTS_ID = "0"


class PirateBaySource(Source):
    """The Pirate Bay torrent source via apibay."""

    name = "tpb"
    fields = FieldMap(
        title=("name",),
        magnet=("magnet",),
        seeds=("seeders",),
        extra=("leechers", "size", "category", "added", "username"),
    )

    def fetch(self, query: str) -> list[dict[str, Any]]:
        """Search The Pirate Bay via apibay."""
        resp = self._get(f"https://apibay.org/q.php?q={quote_plus(query)}")
        data = resp.json()
        if not isinstance(data, list):
            raise ValueError(f"unexpected apibay payload: {type(data).__name__}")
        if data and data[0].get("id") == NO_RESULTS_ID:
            return []
        return data[: self.max_results]

    def normalize(self, raw: dict[str, Any]) -> Result | None:
        """Build the magnet from the info hash before mapping."""
        info_hash = str(raw.get("info_hash") or "").strip()
        name = str(raw.get("name") or "").strip()
        if not info_hash or not name:
            return None
        record = {**raw, "magnet": build_magnet(info_hash, name)}
        return normalize(record, self.name, self.fields)
