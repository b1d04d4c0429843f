"""Main screen for Magno TUI."""

import time

from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import Input

from magno.aggregator import SourceUpdate
from magno.models import Result
from magno.service import AggregationService
from ui.widgets import DetailsPanel, Footer, Header, ResultsList


class MainScreen(Screen):
    """Main search and results screen."""

    BINDINGS = [
        ("slash", "focus_search", "Search"),
        ("escape", "cancel_search", "Cancel"),
        ("r", "refresh", "Refresh"),
        ("question_mark", "show_help", "Help"),
    ]

    def __init__(self, service: AggregationService, **kwargs) -> None:
        super().__init__(**kwargs)
        self.service = service
        self._search_start_time = 0.0
        self._current_query = ""

    def compose(self) -> ComposeResult:
        yield Header(id="header")
        yield ResultsList(id="results-panel")
        yield DetailsPanel(id="details-panel")
        yield Footer(id="footer")

    def on_mount(self) -> None:
        """Focus search on mount."""
        self.query_one(Header).focus_search()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle search submission."""
        if event.input.id == "search-input":
            query = event.value.strip()
            if query:
                self._current_query = query
                self._start_search(query)

    def _start_search(self, query: str) -> None:
        """Start searching across all sources."""
        self._search_start_time = time.time()

        results_list = self.query_one(ResultsList)
        results_list.set_loading(self.service.source_names)
        results_list.focus_list()

        # A new search cancels the one in flight
        self.run_worker(self._search(query), name="search", exclusive=True)

    async def _search(self, query: str) -> None:
        """Run the aggregation and show the ranked results."""
        report = await self.service.handle_with_report(
            query, on_update=self._on_source_update
        )
        self.query_one(ResultsList).finish_loading(report.results)
        self.query_one(Header).search_time = time.time() - self._search_start_time
        if report.all_failed:
            self.notify("All sources failed", severity="error")

    def _on_source_update(self, update: SourceUpdate) -> None:
        """Reflect a source's progress in the results panel."""
        self.query_one(ResultsList).update_source(
            update.source, update.status, len(update.results)
        )

    def on_results_list_result_highlighted(
        self, event: ResultsList.ResultHighlighted
    ) -> None:
        """Update details panel when a result is highlighted."""
        self.query_one(DetailsPanel).result = event.result

    def action_focus_search(self) -> None:
        """Focus the search input."""
        self.query_one(Header).focus_search()

    def action_cancel_search(self) -> None:
        """Return focus to results."""
        self.query_one(ResultsList).focus_list()

    def action_refresh(self) -> None:
        """Refresh the current search."""
        if self._current_query:
            self._start_search(self._current_query)

    def action_show_help(self) -> None:
        """Show the help overlay."""
        from .help import HelpScreen

        self.app.push_screen(HelpScreen())

    def get_selected_result(self) -> Result | None:
        """Get the currently selected result."""
        return self.query_one(ResultsList).get_selected()
