"""Results screen: the finished job's sessions as a sortable table."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from loguru import logger
from textual.app import ComposeResult
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Static

from autopfs_viz.core.client import ApiClient
from autopfs_viz.core.config import Config
from autopfs_viz.core.location import job_id, origin
from autopfs_viz.core.sorting import SortEngine
from autopfs_viz.core.state import StateManager
from autopfs_viz.rendering.columns import get_column
from autopfs_viz.rendering.table_renderer import TableRenderer
from autopfs_viz.transformer import parse_job
from autopfs_viz.utils.errors import APIError, ErrorHandler, ModelError


class ResultsScreen(Screen):
    """Fetches a job result and shows its sessions."""

    CSS = """
    #banner {
        height: auto;
        padding: 0 2;
        border-bottom: solid $primary;
    }

    #session-table {
        height: 1fr;
    }

    DataTable > .datatable--header {
        background: $primary;
        color: $text;
    }
    """

    BINDINGS = [
        ("q", "app.quit", "Quit"),
        ("r", "reload", "Reload"),
    ]

    def __init__(
        self,
        page_url: str,
        state: StateManager,
        config: Config,
        client: Optional[ApiClient] = None,
    ) -> None:
        """Initialize screen.

        Args:
            page_url: Result page URL (``/html?id=...``)
            state: Shared application state
            config: Application configuration
            client: API client (defaults to one for the page's origin)
        """
        super().__init__()
        self.page_url = page_url
        self.job_id = job_id(page_url)
        self.state = state
        self.config = config
        self.client = client or ApiClient(replace(config.api, base_url=origin(page_url)))
        self.renderer = TableRenderer()
        self.sort_engine = SortEngine(state, self.renderer.columns, redraw=self.redraw)
        self.error_handler = ErrorHandler()

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Static(f"Loading job {self.job_id}...", id="banner")
        yield DataTable(id="session-table", zebra_stripes=True)
        yield Footer()

    def on_mount(self) -> None:
        self.app.sub_title = f"Job {self.job_id}"
        table = self.query_one("#session-table", DataTable)
        self.renderer.build_header(table, self._marker)
        self.run_worker(self.load(), name="fetch-job", exclusive=True)

    async def on_unmount(self) -> None:
        await self.client.close()

    async def action_reload(self) -> None:
        self.run_worker(self.load(), name="fetch-job", exclusive=True)

    async def load(self) -> None:
        """Fetch, parse and render the job; failures end in the error state."""
        try:
            raw = await self.client.fetch_job(self.job_id)
            job = parse_job(raw)
        except (APIError, ModelError) as e:
            self.state.set_fetch_error(str(e))
            self.query_one("#banner", Static).update(
                self.error_handler.create_error_message(
                    "Could not load job result",
                    e,
                    suggestions=["Press r to retry", f"Check that {origin(self.page_url)} is reachable"],
                )
            )
            return

        self.state.set_job(job)
        column = get_column(self.state.sort_column, self.renderer.columns)
        if column is not None:
            self.sort_engine.sort_sessions(column)
        self.redraw()

    def _marker(self, column_name: str) -> str:
        if not self.config.ui.show_sort_markers:
            return ""
        return self.sort_engine.sort_marker(column_name)

    def redraw(self) -> None:
        table = self.query_one("#session-table", DataTable)
        self.renderer.update_header(table, self._marker)
        rows = self.renderer.render(table, self.state.job, self.state.filters)
        self.query_one("#banner", Static).update(
            f"{rows} of {len(self.state.job.sessions) if self.state.job else 0} sessions"
            f" | {self.state.get_status_summary()}"
        )

    def on_data_table_header_selected(self, event: DataTable.HeaderSelected) -> None:
        """Handle DataTable header clicks for sorting."""
        column_key = getattr(event.column_key, "value", None)
        if not column_key:
            logger.warning("Header click without column key")
            return
        if self.state.job is None:
            return
        self.sort_engine.on_column_activated(column_key)
