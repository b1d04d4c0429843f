"""Magno TUI Application."""

import webbrowser
from pathlib import Path

import pyperclip
from textual.app import App
from textual.widgets import ListView

from magno.config import load_settings
from magno.service import AggregationService
from magno.sources import add_trackers
from magno.utils import open_magnet
from ui.screens import MainScreen


class MagnoApp(App):
    """Magno TUI Application."""

    TITLE = "Magno"
    CSS_PATH = Path(__file__).parent / "styles.tcss"

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("enter", "download", "Download"),
        ("y", "copy_magnet", "Copy Magnet"),
        ("o", "open_browser", "Open in Browser"),
        ("j", "cursor_down", "Down"),
        ("k", "cursor_up", "Up"),
        ("g", "cursor_first", "First"),
        ("G", "cursor_last", "Last"),
    ]

    def __init__(self, service: AggregationService | None = None, **kwargs):
        super().__init__(**kwargs)
        self.service = service or AggregationService.from_settings(load_settings())

    def on_mount(self) -> None:
        """Push the main screen on mount."""
        self.push_screen(MainScreen(self.service))

    def action_download(self) -> None:
        """Send the selected magnet to the torrent client."""
        result = self._selected_result()
        if not result:
            return

        if open_magnet(add_trackers(result.magnet_link)):
            self.notify(f"Sent to torrent client: {result.title}", severity="information")
        else:
            self.notify("Failed to open magnet link", severity="error")

    def action_copy_magnet(self) -> None:
        """Copy magnet link to clipboard."""
        result = self._selected_result()
        if not result:
            return

        try:
            pyperclip.copy(add_trackers(result.magnet_link))
            self.notify("Magnet link copied to clipboard", severity="information")
        except pyperclip.PyperclipException as e:
            self.notify(f"Failed to copy: {e}", severity="error")

    def action_open_browser(self) -> None:
        """Open detail page in browser."""
        result = self._selected_result()
        if not result:
            return

        detail_url = result.extra.get("detail_url")
        if detail_url:
            webbrowser.open(detail_url)
            self.notify("Opened in browser", severity="information")
        else:
            self.notify("No detail URL available for this torrent", severity="warning")

    def action_cursor_down(self) -> None:
        """Move cursor down in the list."""
        self._move_cursor(1)

    def action_cursor_up(self) -> None:
        """Move cursor up in the list."""
        self._move_cursor(-1)

    def action_cursor_first(self) -> None:
        """Move cursor to first item."""
        list_view = self._results_list()
        if list_view and list_view.children:
            list_view.index = 0

    def action_cursor_last(self) -> None:
        """Move cursor to last item."""
        list_view = self._results_list()
        if list_view and list_view.children:
            list_view.index = len(list_view.children) - 1

    def _move_cursor(self, delta: int) -> None:
        """Move the cursor by delta positions."""
        list_view = self._results_list()
        if list_view and list_view.children:
            new_index = (list_view.index or 0) + delta
            list_view.index = max(0, min(new_index, len(list_view.children) - 1))

    def _results_list(self) -> ListView | None:
        if not isinstance(self.screen, MainScreen):
            return None
        return self.screen.query_one("#results-list", ListView)

    def _selected_result(self):
        """Get the highlighted result, warning if there is none."""
        result = None
        if isinstance(self.screen, MainScreen):
            result = self.screen.get_selected_result()
        if not result:
            self.notify("No torrent selected", severity="warning")
        return result
