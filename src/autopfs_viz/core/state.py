"""State management for the dashboard.

All mutable state of one dashboard instance lives here: the job snapshot,
the active sort, the stream's last-seen message time and connection state.
One StateManager is built at startup and handed to the stream client and
the sort engine.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from loguru import logger

from autopfs_viz.models import Job
from autopfs_viz.rendering.columns import Filter

# Minimum representable timestamp; every real message is after it
EPOCH_MIN = datetime.min.replace(tzinfo=timezone.utc)


class StreamState(Enum):
    """Connection state of the live status stream."""

    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"
    NAVIGATING = "navigating"


class StateManager:
    """Manages application state centrally."""

    def __init__(self, default_sort_column: str = "Date") -> None:
        """Initialize state manager.

        Args:
            default_sort_column: Column treated as active before any click
        """

        # Job data
        self.job: Optional[Job] = None
        self.fetch_error: Optional[str] = None
        self.last_update: Optional[datetime] = None

        # Sort state
        self.sort_column: str = default_sort_column
        self.sort_ascending: bool = True
        self.filters: List[Filter] = []

        # Stream state
        self.last_message: datetime = EPOCH_MIN
        self.stream_state: StreamState = StreamState.CLOSED
        self.displayed_state: str = ""

        logger.debug("StateManager initialized")

    def set_job(self, job: Job) -> None:
        """Replace the job snapshot wholesale.

        Args:
            job: Freshly parsed job
        """
        self.job = job
        self.fetch_error = None
        self.last_update = datetime.now()
        logger.info(f"Job set: {job.job_id} ({len(job.sessions)} sessions)")

    def set_fetch_error(self, error: str) -> None:
        self.fetch_error = error
        logger.error(f"Job fetch failed: {error}")

    def set_stream_state(self, state: StreamState) -> None:
        if state is not self.stream_state:
            logger.debug(f"Stream state: {self.stream_state.value} -> {state.value}")
        self.stream_state = state

    def get_status_summary(self) -> str:
        """Get status summary string for the footer/subtitle.

        Returns:
            Status string
        """
        parts = []

        if self.job:
            parts.append(f"Job: {self.job.job_id}")
            parts.append(f"{len(self.job.sessions)} sessions")

        arrow = "▲" if self.sort_ascending else "▼"
        parts.append(f"Sort: {self.sort_column} {arrow}")

        if self.filters:
            parts.append(f"Filters: {len(self.filters)}")

        if self.last_update:
            parts.append(f"Updated: {self.last_update:%H:%M:%S}")

        return " | ".join(parts)
