"""Footer widget with keybinding hints."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widgets import Static

HINTS = [
    ("/", "search"),
    ("↑↓", "navigate"),
    ("enter", "open"),
    ("y", "copy"),
    ("r", "refresh"),
    ("?", "help"),
    ("q", "quit"),
]


class Footer(Static):
    """Footer with keybinding hints."""

    def compose(self) -> ComposeResult:
        with Horizontal():
            for key, label in HINTS:
                yield Static(key, classes="keyhint-key")
                yield Static(f"{label}  ", classes="keyhint")
