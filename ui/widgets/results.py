"""Results list widget."""

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import ListItem, ListView, Static

from magno.models import Result
from magno.utils import format_number

HEALTH_WIDTHS = {
    "excellent": 40,
    "good": 30,
    "fair": 20,
    "poor": 10,
    "dead": 3,
}

STATUS_ICONS = {
    "pending": "○",
    "loading": "◐",
    "done": "✓",
    "error": "✗",
    "timeout": "⌛",
}


class ResultItem(ListItem):
    """A single result in the list."""

    def __init__(self, result: Result, **kwargs) -> None:
        super().__init__(**kwargs)
        self.result = result
        self.add_class("result-item")

    def compose(self) -> ComposeResult:
        r = self.result
        yield Static(r.title, classes="result-title")
        parts = [str(r.extra["size"])] if r.extra.get("size") else []
        parts += [r.source, f"{format_number(r.seeds)} ↑"]
        yield Static("  ·  ".join(parts), classes="result-meta")
        with Horizontal(classes="health-bar"):
            yield Static(
                "━" * HEALTH_WIDTHS.get(r.health, 10),
                classes=f"health-bar-fill {r.health}",
            )
            yield Static(f" health: {r.health}", classes="health-label")


class SourceStatus(Static):
    """Status indicator for a search source."""

    def __init__(self, name: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.source_name = name
        self.add_class("source-status")

    def set_status(self, status: str, count: int = 0) -> None:
        """Update the source status."""
        self.remove_class(*STATUS_ICONS)
        self.add_class(status)

        icon = STATUS_ICONS.get(status, "○")
        label = {
            "done": f"{count} results",
            "loading": "loading...",
            "error": "error",
            "timeout": "timed out",
        }.get(status, "")
        self.update(f"{icon} {self.source_name:<14} {label}")


class ResultsList(Vertical):
    """Scrollable list of search results with per-source progress."""

    class ResultHighlighted(Message):
        """Message when a result is highlighted."""

        def __init__(self, result: Result | None) -> None:
            self.result = result
            super().__init__()

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._source_statuses: dict[str, SourceStatus] = {}

    def compose(self) -> ComposeResult:
        yield Static("Results", id="results-title")
        yield ListView(id="results-list")

    def set_loading(self, sources: list[str]) -> None:
        """Show a loading line for each source."""
        list_view = self.query_one("#results-list", ListView)
        list_view.clear()

        self._source_statuses = {}
        for source in sources:
            status = SourceStatus(source)
            status.set_status("loading")
            self._source_statuses[source] = status
            list_view.append(ListItem(status))

        self.query_one("#results-title", Static).update("Results (searching...)")

    def update_source(self, source: str, status: str, count: int = 0) -> None:
        """Update status for a specific source."""
        if source in self._source_statuses:
            self._source_statuses[source].set_status(status, count)

    def finish_loading(self, results: list[Result]) -> None:
        """Replace the progress lines with the ranked results."""
        list_view = self.query_one("#results-list", ListView)
        list_view.clear()
        self._source_statuses = {}

        for result in results:
            list_view.append(ResultItem(result))

        title = f"Results ({len(results)} found)" if results else "No results"
        self.query_one("#results-title", Static).update(title)

        if results:
            list_view.index = 0

    def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        """Handle result highlight."""
        if event.item and isinstance(event.item, ResultItem):
            self.post_message(self.ResultHighlighted(event.item.result))
        else:
            self.post_message(self.ResultHighlighted(None))

    def get_selected(self) -> Result | None:
        """Get the currently selected result."""
        list_view = self.query_one("#results-list", ListView)
        if isinstance(list_view.highlighted_child, ResultItem):
            return list_view.highlighted_child.result
        return None

    def focus_list(self) -> None:
        """Focus the results list."""
        self.query_one("#results-list", ListView).focus()
