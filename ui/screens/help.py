"""Help overlay screen."""

from textual.app import ComposeResult
from textual.containers import Center, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Static

SECTIONS = {
    "Navigation": [
        ("↑ / k", "Move selection up"),
        ("↓ / j", "Move selection down"),
        ("g", "Jump to first result"),
        ("G", "Jump to last result"),
        ("Tab", "Cycle focus between panels"),
    ],
    "Actions": [
        ("Enter", "Open magnet in torrent client"),
        ("y", "Copy magnet link to clipboard"),
        ("o", "Open detail page in browser"),
        ("r", "Search again"),
    ],
    "Search": [
        ("/", "Focus search input"),
        ("Esc", "Return to results"),
    ],
    "General": [
        ("?", "Show this help"),
        ("q", "Quit"),
    ],
}


class HelpScreen(ModalScreen):
    """Modal help screen with keybinding reference."""

    BINDINGS = [
        ("escape", "dismiss", "Close"),
        ("question_mark", "dismiss", "Close"),
        ("q", "dismiss", "Close"),
    ]

    def compose(self) -> ComposeResult:
        with Center(id="help-overlay"):
            with Vertical(id="help-container"):
                yield Static("🧲 MAGNO HELP", id="help-title")
                yield Static(
                    "Results from every source, ranked by seeds.", id="help-subtitle"
                )

                for title, rows in SECTIONS.items():
                    with Vertical(classes="help-section"):
                        yield Static(title, classes="help-section-title")
                        for key, desc in rows:
                            yield self._help_row(key, desc)

                yield Static("")
                yield Static("Press Esc or ? to close", id="help-close-hint")

    def _help_row(self, key: str, desc: str) -> Horizontal:
        """Create a help row with key and description."""
        return Horizontal(
            Static(key, classes="help-key"),
            Static(desc, classes="help-desc"),
            classes="help-row",
        )

    def action_dismiss(self) -> None:
        """Close the help screen."""
        self.app.pop_screen()
