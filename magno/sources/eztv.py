"""EZTV torrent source for TV episodes."""

from typing import Any
from urllib.parse import quote, urljoin

from bs4 import BeautifulSoup

from ..normalize import FieldMap
from .base import Source

BASE_URL = "https://eztvx.to"


class EztvSource(Source):
    """eztv TV torrent source."""

    name = "eztv"
    fields = FieldMap(
        title=("title",),
        magnet=("magnet",),
        seeds=("seeds",),
        extra=("size", "released", "detail_url"),
    )

    def fetch(self, query: str) -> list[dict[str, Any]]:
        """Search eztv via scraping."""
        slug = quote(query.strip().replace(" ", "-"))
        resp = self._get(f"{BASE_URL}/search/{slug}")
        return self.parse(resp.text)

    def parse(self, html: str) -> list[dict[str, Any]]:
        """Extract raw records from a search results page."""
        soup = BeautifulSoup(html, "html.parser")
        records = []
        for row in soup.select("tr.forum_header_border"):
            title_link = row.select_one("a.epinfo")
            if not title_link:
                continue

            magnet_link = row.select_one("a.magnet")
            cols = row.find_all("td")
            seeds_elem = row.select_one("td.forum_thread_post_end")

            records.append(
                {
                    "title": title_link.get("title") or title_link.get_text(strip=True),
                    "magnet": magnet_link.get("href") if magnet_link else None,
                    "detail_url": urljoin(BASE_URL, title_link.get("href", "")),
                    "size": cols[3].get_text(strip=True) if len(cols) > 3 else None,
                    "released": cols[4].get_text(strip=True) if len(cols) > 4 else None,
                    "seeds": seeds_elem.get_text(strip=True) if seeds_elem else None,
                }
            )
            if len(records) >= self.max_results:
                break
        return records
