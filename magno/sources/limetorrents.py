"""LimeTorrents torrent source."""

import re
from typing import Any
from urllib.parse import quote, urljoin

from bs4 import BeautifulSoup

from ..models import Result
from ..normalize import FieldMap, normalize
from .base import Source, build_magnet

BASE_URL = "https://www.limetorrents.lol"
HASH_RE = re.compile(r"/torrent/([0-9A-Fa-f]{40})\.torrent")


class LimeTorrentsSource(Source):
    """limetorrents torrent source."""

    name = "limetorrents"
    fields = FieldMap(
        title=("title",),
        magnet=("magnet",),
        seeds=("seeds",),
        extra=("leechers", "size", "added", "detail_url"),
    )

    def fetch(self, query: str) -> list[dict[str, Any]]:
        """Search limetorrents via scraping, best seeded first."""
        slug = quote(query.strip().replace(" ", "-"))
        resp = self._get(f"{BASE_URL}/search/all/{slug}/seeds/1/")
        return self.parse(resp.text)

    def parse(self, html: str) -> list[dict[str, Any]]:
        """Extract raw records from a search results page."""
        soup = BeautifulSoup(html, "html.parser")
        records = []
        for row in soup.select("table.table2 tr"):
            cols = row.find_all("td")
            if len(cols) < 5:
                continue

            links = cols[0].select("div.tt-name a")
            if len(links) < 2:
                continue
            torrent_url = links[0].get("href", "")
            title_link = links[1]

            match = HASH_RE.search(torrent_url)
            records.append(
                {
                    "title": title_link.get_text(strip=True),
                    "hash": match.group(1) if match else None,
                    "torrent_url": urljoin(BASE_URL, torrent_url) if torrent_url else None,
                    "detail_url": urljoin(BASE_URL, title_link.get("href", "")),
                    "added": cols[1].get_text(strip=True),
                    "size": cols[2].get_text(strip=True),
                    "seeds": cols[3].get_text(strip=True),
                    "leechers": cols[4].get_text(strip=True),
                }
            )
            if len(records) >= self.max_results:
                break
        return records

    def normalize(self, raw: dict[str, Any]) -> Result | None:
        """Prefer a magnet built from the info hash over the .torrent URL."""
        title = raw.get("title") or ""
        if raw.get("hash"):
            magnet = build_magnet(raw["hash"], title)
        else:
            magnet = raw.get("torrent_url")
        return normalize({**raw, "magnet": magnet}, self.name, self.fields)
