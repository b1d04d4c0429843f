"""Dynamic source that uses configuration to scrape any site."""

from typing import Any
from urllib.parse import quote_plus, urljoin

from bs4 import BeautifulSoup

from ..config import SiteConfig
from ..normalize import FieldMap
from .base import MAX_RESULTS, Source

DYNAMIC_FIELDS = FieldMap(
    title=("title",),
    magnet=("magnet",),
    seeds=("seeders",),
    extra=("leechers", "size", "detail_url"),
)


class DynamicSource(Source):
    """A torrent source that uses SiteConfig to scrape any site.

    Only magnets present on the results page are used; records without
    one are rejected during normalization.
    """

    fields = DYNAMIC_FIELDS

    def __init__(self, config: SiteConfig, max_results: int = MAX_RESULTS):
        super().__init__(max_results=max_results)
        self.config = config
        self.name = config.name

    def fetch(self, query: str) -> list[dict[str, Any]]:
        """Search the configured site."""
        url = self.config.search.url_template.format(
            base_url=self.config.base_url,
            query=quote_plus(query),
        )
        resp = self._get(url)
        return self.parse(resp.text)

    def parse(self, html: str) -> list[dict[str, Any]]:
        """Extract raw records using the configured selectors."""
        soup = BeautifulSoup(html, "html.parser")
        records = []
        for item in soup.select(self.config.selectors.result_item):
            record = self._parse_item(item)
            if record:
                records.append(record)
            if len(records) >= self.max_results:
                break
        return records

    def _parse_item(self, item) -> dict[str, Any] | None:
        """Parse a single result item into a raw record."""
        selectors = self.config.selectors

        title_elem = item.select_one(selectors.title)
        if not title_elem:
            return None

        # Link is either from title_link selector or the title element
        link_elem = (
            item.select_one(selectors.title_link)
            if selectors.title_link
            else title_elem
        )
        detail_url = None
        if link_elem is not None:
            a_tag = link_elem
            if link_elem.name != "a":
                a_tag = link_elem.find_parent("a") or link_elem.find("a")
            if a_tag and a_tag.get("href"):
                detail_url = urljoin(self.config.base_url, a_tag["href"])

        magnet = None
        magnet_elem = item.select_one(selectors.magnet)
        if magnet_elem and magnet_elem.get("href", "").startswith("magnet:"):
            magnet = magnet_elem["href"]

        return {
            "title": title_elem.get_text(strip=True),
            "magnet": magnet,
            "detail_url": detail_url,
            "size": self._text(item, selectors.size),
            "seeders": self._text(item, selectors.seeders),
            "leechers": self._text(item, selectors.leechers),
        }

    @staticmethod
    def _text(item, selector: str | None) -> str | None:
        if not selector:
            return None
        elem = item.select_one(selector)
        return elem.get_text(strip=True) if elem else None
