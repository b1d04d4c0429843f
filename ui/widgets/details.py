"""Details panel widget."""

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.widgets import Static

from magno.models import Result

PLACEHOLDER = "Select a torrent to view details"


class DetailsPanel(Static):
    """Panel showing details of the selected result."""

    result: reactive[Result | None] = reactive(None)

    def compose(self) -> ComposeResult:
        yield Static(PLACEHOLDER, id="details-title")
        with Vertical(id="details-grid"):
            with Horizontal():
                yield Static("Seeds", classes="detail-label")
                yield Static("-", classes="detail-value", id="detail-seeds")
                yield Static("Size", classes="detail-label")
                yield Static("-", classes="detail-value", id="detail-size")
            with Horizontal():
                yield Static("Source", classes="detail-label")
                yield Static("-", classes="detail-value", id="detail-source")
                yield Static("Leechers", classes="detail-label")
                yield Static("-", classes="detail-value", id="detail-leechers")
        yield Static("", id="magnet-preview")

    def watch_result(self, result: Result | None) -> None:
        """Update display when result changes."""
        if not self.is_mounted:
            return
        if result is None:
            self._show(PLACEHOLDER, "-", "-", "-", "-", "")
            return

        magnet = result.magnet_link
        preview = magnet[:60] + "..." if len(magnet) > 60 else magnet
        self._show(
            result.title,
            f"{result.seeds:,}",
            str(result.extra.get("size") or "-"),
            result.source,
            str(result.extra.get("leechers") or "-"),
            f"Magnet: {preview}",
        )

    def _show(self, title, seeds, size, source, leechers, magnet) -> None:
        self.query_one("#details-title", Static).update(title)
        self.query_one("#detail-seeds", Static).update(seeds)
        self.query_one("#detail-size", Static).update(size)
        self.query_one("#detail-source", Static).update(source)
        self.query_one("#detail-leechers", Static).update(leechers)
        self.query_one("#magnet-preview", Static).update(magnet)
