"""Status screen: live message log and job state for a running job."""

from __future__ import annotations

from typing import Callable

from loguru import logger
from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import Footer, Header, Log, Static

from autopfs_viz.core.config import StreamConfig
from autopfs_viz.core.location import job_id
from autopfs_viz.core.state import StateManager, StreamState
from autopfs_viz.core.stream import StreamClient

CONNECTION_LABELS = {
    StreamState.CONNECTING: "[yellow]● connecting[/yellow]",
    StreamState.OPEN: "[green]● live[/green]",
    StreamState.CLOSED: "[red]● reconnecting[/red]",
    StreamState.NAVIGATING: "[cyan]● done[/cyan]",
}


class StatusScreen(Screen):
    """Streams status messages for one job."""

    CSS = """
    #status-bar {
        height: 3;
        padding: 0 2;
        border-bottom: solid $primary;
    }

    #job-state {
        width: 1fr;
        content-align: left middle;
    }

    #connection {
        width: auto;
        content-align: right middle;
    }

    #message-list {
        height: 1fr;
        padding: 0 1;
    }
    """

    BINDINGS = [
        ("q", "app.quit", "Quit"),
    ]

    def __init__(
        self,
        page_url: str,
        state: StateManager,
        navigate: Callable[[str], None],
        config: StreamConfig | None = None,
    ) -> None:
        """Initialize screen.

        Args:
            page_url: Status page URL of the job
            state: Shared application state
            navigate: Called with the result page URL when the job is done
            config: Stream configuration
        """
        super().__init__()
        self.page_url = page_url
        self.state = state
        self.stream = StreamClient(
            page_url,
            state=state,
            display=self,
            navigate=navigate,
            config=config,
        )

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="status-bar"):
            yield Static("Job state: [dim]unknown[/dim]", id="job-state")
            yield Static("", id="connection")
        yield Log(id="message-list", highlight=False)
        yield Footer()

    def on_mount(self) -> None:
        self.app.sub_title = f"Job {job_id(self.page_url)}"
        self.run_worker(self.stream.run(), name="status-stream", exclusive=True)
        logger.info(f"Status screen mounted for {self.page_url}")

    # StatusDisplay

    def append_line(self, line: str) -> None:
        self.query_one("#message-list", Log).write_line(line)

    def show_state(self, state: str) -> None:
        self.query_one("#job-state", Static).update(f"Job state: [bold]{escape(state)}[/bold]")

    def show_connection(self, state: StreamState) -> None:
        self.query_one("#connection", Static).update(CONNECTION_LABELS[state])
