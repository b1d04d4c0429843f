"""Configuration schema for Magno."""

from dataclasses import dataclass, field

DEFAULT_SOURCES = ["tpb", "limetorrents", "eztv"]
DEFAULT_TIMEOUT = 20.0
DEFAULT_MAX_RESULTS = 30
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000


@dataclass
class Settings:
    """Runtime settings for the aggregation service."""

    timeout: float | None = DEFAULT_TIMEOUT  # per source, None or 0 disables
    max_results: int = DEFAULT_MAX_RESULTS  # raw records kept per source
    sources: list[str] = field(default_factory=lambda: list(DEFAULT_SOURCES))
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        """Create from dictionary (YAML deserialization)."""
        timeout = data.get("timeout", DEFAULT_TIMEOUT)
        if timeout is not None:
            timeout = float(timeout)
            if timeout <= 0:
                timeout = None
        return cls(
            timeout=timeout,
            max_results=int(data.get("max_results", DEFAULT_MAX_RESULTS)),
            sources=list(data.get("sources", DEFAULT_SOURCES)),
            host=str(data.get("host", DEFAULT_HOST)),
            port=int(data.get("port", DEFAULT_PORT)),
        )


@dataclass
class SearchConfig:
    """Search configuration for a site."""

    url_template: str  # e.g., "{base_url}/?s={query}"


@dataclass
class SelectorsConfig:
    """CSS selectors for extracting data from a results page."""

    result_item: str  # Selector for each result item
    title: str  # Selector for title within result item
    magnet: str = "a[href^='magnet:']"
    title_link: str | None = None  # If different from title selector
    size: str | None = None
    seeders: str | None = None
    leechers: str | None = None


@dataclass
class SiteConfig:
    """Configuration for a dynamic torrent site."""

    name: str
    base_url: str
    search: SearchConfig
    selectors: SelectorsConfig
    enabled: bool = True

    def to_dict(self) -> dict:
        """Convert to dictionary for YAML serialization."""
        return {
            "name": self.name,
            "base_url": self.base_url,
            "enabled": self.enabled,
            "search": {"url_template": self.search.url_template},
            "selectors": {
                "result_item": self.selectors.result_item,
                "title": self.selectors.title,
                "magnet": self.selectors.magnet,
                "title_link": self.selectors.title_link,
                "size": self.selectors.size,
                "seeders": self.selectors.seeders,
                "leechers": self.selectors.leechers,
            },
        }

    @classmethod
    def from_dict(cls, key: str, data: dict) -> "SiteConfig":
        """Create from dictionary (YAML deserialization)."""
        search_data = data.get("search", {})
        selectors_data = data.get("selectors", {})

        return cls(
            name=data.get("name", key),
            base_url=data["base_url"],
            enabled=data.get("enabled", True),
            search=SearchConfig(url_template=search_data["url_template"]),
            selectors=SelectorsConfig(
                result_item=selectors_data["result_item"],
                title=selectors_data["title"],
                magnet=selectors_data.get("magnet", "a[href^='magnet:']"),
                title_link=selectors_data.get("title_link"),
                size=selectors_data.get("size"),
                seeders=selectors_data.get("seeders"),
                leechers=selectors_data.get("leechers"),
            ),
        )
