"""Dashboard application.

Wires config, state and the two screens together: the status screen streams
messages for a running job and hands over to the results screen once the job
is done.
"""

from __future__ import annotations

from typing import Optional, Sequence

from loguru import logger
from textual.app import App

from autopfs_viz.core.config import Config
from autopfs_viz.core.location import job_id
from autopfs_viz.core.state import StateManager
from autopfs_viz.logging_config import set_job_context
from autopfs_viz.rendering.columns import Filter
from autopfs_viz.screens.results import ResultsScreen
from autopfs_viz.screens.status import StatusScreen

START_STATUS = "status"
START_RESULTS = "html"


class DashboardApp(App):
    """Live job dashboard."""

    TITLE = "AutoPFS"
    SUB_TITLE = ""

    def __init__(
        self,
        page_url: str,
        start: str = START_STATUS,
        config: Optional[Config] = None,
        filters: Sequence[Filter] = (),
    ) -> None:
        """Initialize application.

        Args:
            page_url: Status page URL (``start="status"``) or result page URL
                (``start="html"``)
            start: Which screen to open first
            config: Application configuration (defaults are used if None)
            filters: Row filters for the results table

        Raises:
            ValueError: If start is not a known screen
        """
        super().__init__()
        if start not in (START_STATUS, START_RESULTS):
            raise ValueError(f"Unknown start screen: {start}")

        self.page_url = page_url
        self.start = start
        self.config = config or Config()
        self.state = StateManager(default_sort_column=self.config.ui.default_sort_column)
        self.state.filters = list(filters)
        set_job_context(job_id(page_url))

    def on_mount(self) -> None:
        if self.start == START_RESULTS:
            self.push_screen(ResultsScreen(self.page_url, self.state, self.config))
        else:
            self.push_screen(
                StatusScreen(self.page_url, self.state, self.navigate, self.config.stream)
            )

    def navigate(self, url: str) -> None:
        """Leave the status screen for the result page at ``url``."""
        logger.info(f"Switching to results: {url}")
        self.call_later(self._show_results, url)

    def _show_results(self, url: str) -> None:
        self.page_url = url
        self.switch_screen(ResultsScreen(url, self.state, self.config))


def run_dashboard(
    page_url: str,
    start: str = START_STATUS,
    config: Optional[Config] = None,
    filters: Sequence[Filter] = (),
) -> None:
    """Run the dashboard.

    Args:
        page_url: Status or result page URL
        start: ``"status"`` or ``"html"``
        config: Application configuration
        filters: Row filters for the results table
    """
    try:
        app = DashboardApp(page_url, start=start, config=config, filters=filters)
        logger.info(f"Starting dashboard on {start} screen for {page_url}")
        app.run()
    except Exception as e:
        logger.opt(exception=e).error(f"Fatal error in run_dashboard: {e}")
        raise
