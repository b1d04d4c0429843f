"""Data models for Magno."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Result:
    """A single normalized search result."""

    title: str
    magnet_link: str
    seeds: int
    source: str  # "tpb", "limetorrents", "eztv", or a dynamic site name
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape returned by the API."""
        data = dict(self.extra)
        data.update(
            {
                "title": self.title,
                "magnet": self.magnet_link,
                "seeds": self.seeds,
                "source": self.source,
            }
        )
        return data

    @property
    def health(self) -> str:
        """Rough health bucket based on seed count."""
        if self.seeds == 0:
            return "dead"
        if self.seeds > 100:
            return "excellent"
        if self.seeds > 20:
            return "good"
        if self.seeds > 5:
            return "fair"
        return "poor"
