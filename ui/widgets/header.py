"""Header widget with title, search input, and timer."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.reactive import reactive
from textual.widgets import Input, Static


class Header(Static):
    """Header with title, search input and search timer."""

    search_time = reactive(0.0)

    def compose(self) -> ComposeResult:
        yield Static("🧲 MAGNO", id="title")
        with Horizontal(id="search-row"):
            yield Static("🔍 ", id="search-icon")
            yield Input(placeholder="Search magnet links...", id="search-input")
            yield Static("↕ Seeds", id="sort-indicator")
            yield Static("", id="timer")

    def watch_search_time(self, elapsed: float) -> None:
        """Update timer display."""
        if not self.is_mounted:
            return
        timer = self.query_one("#timer", Static)
        timer.update(f"⏱ {elapsed:.1f}s" if elapsed > 0 else "")

    def focus_search(self) -> None:
        """Focus the search input."""
        self.query_one("#search-input", Input).focus()
