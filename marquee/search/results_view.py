from __future__ import annotations

from typing import Iterable

from rich.console import Console
from rich.markup import escape
from rich.status import Status
from rich.table import Table

from marquee.search.parsers import poster_url
from marquee.search.state_machine import SearchState, SearchStatus
from marquee.search.types import MovieRecord

OVERVIEW_LIMIT = 120
EMPTY_RESULTS_MESSAGE = "No movies found."
ERROR_MESSAGE = "Search failed. Check your connection or API key and try again."


def truncate(text: str, limit: int = OVERVIEW_LIMIT) -> str:
    text = " ".join(text.split())
    if len(text) <= limit:
        return text
    return text[: max(limit - 3, 0)].rstrip() + "..."


def format_rating(rating: float) -> str:
    return f"{rating:.1f}"


def build_results_table(records: Iterable[MovieRecord], image_base_url: str) -> Table:
    table = Table(title="Results")
    table.add_column("Title", style="cyan")
    table.add_column("Release Date", style="green", no_wrap=True)
    table.add_column("Rating", justify="right", no_wrap=True)
    table.add_column("Poster", style="grey50")
    table.add_column("Overview", style="yellow")
    for record in records:
        table.add_row(
            escape(record.title or "(untitled)"),
            escape(record.release_date or "-"),
            format_rating(record.rating),
            escape(poster_url(record, image_base_url) or "-"),
            escape(truncate(record.overview)),
        )
    return table


class ResultsView:
    """Render the loading, loaded and errored views from state snapshots."""

    def __init__(self, console: Console, image_base_url: str) -> None:
        self.console = console
        self.image_base_url = image_base_url
        self._spinner: Status | None = None

    def __call__(self, state: SearchState) -> None:
        if state.status is SearchStatus.LOADING:
            self._start_spinner(state.query)
            return
        self._stop_spinner()
        if state.status is SearchStatus.LOADED:
            self._render_loaded(state)
        elif state.status is SearchStatus.ERRORED:
            self.console.print(f"[red][ERROR][/red] {ERROR_MESSAGE}")

    def _render_loaded(self, state: SearchState) -> None:
        if not state.results:
            self.console.print(EMPTY_RESULTS_MESSAGE)
            return
        self.console.print(build_results_table(state.results, self.image_base_url))

    def _start_spinner(self, query: str) -> None:
        self._stop_spinner()
        self._spinner = self.console.status(f"Searching for '{escape(query)}' ...")
        self._spinner.start()

    def _stop_spinner(self) -> None:
        if self._spinner is not None:
            self._spinner.stop()
            self._spinner = None

    def close(self) -> None:
        self._stop_spinner()
