"""Session table rendering.

The renderer is stateless given a job and the column registry: every call
discards the previous rows and rebuilds one row per session, one cell per
column. It never reads or changes the sort state; sort markers for the
header are supplied by the caller.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence, Tuple

from loguru import logger
from rich.text import Text
from textual.widgets import DataTable
from textual.widgets.data_table import ColumnKey

from autopfs_viz.models import Job
from autopfs_viz.rendering.columns import COLUMNS, Column, Filter, apply_filters

Row = Tuple[Text, ...]


class TableRenderer:
    """Renders a job's sessions through the column registry."""

    def __init__(self, columns: Sequence[Column] = COLUMNS) -> None:
        """Initialize renderer.

        Args:
            columns: Column registry driving header and cells
        """
        self.columns = columns

    def build_rows(self, job: Optional[Job], filters: Sequence[Filter] = ()) -> List[Row]:
        """Build the cell fragments for every visible session.

        Args:
            job: Job to render (None renders nothing)
            filters: Row filters; empty means one row per session

        Returns:
            One tuple of cells per row, in session order
        """
        if job is None:
            return []

        sessions = apply_filters(job.sessions, filters, self.columns)
        return [
            tuple(column.render(session) for column in self.columns)
            for session in sessions
        ]

    def header_label(self, column: Column, marker: str = "") -> Text:
        label = Text(column.name, style="bold", no_wrap=True)
        if marker:
            label.append(marker, style="bold")
        return label

    def build_header(
        self,
        table: DataTable,
        marker: Optional[Callable[[str], str]] = None,
    ) -> None:
        """Add one DataTable column per descriptor, keyed by column name."""
        table.clear(columns=True)
        for column in self.columns:
            suffix = marker(column.name) if marker else ""
            table.add_column(self.header_label(column, suffix), key=column.name)
        logger.debug(f"Built header with {len(self.columns)} columns")

    def update_header(self, table: DataTable, marker: Callable[[str], str]) -> None:
        """Refresh header labels, e.g. after the sort column changed."""
        for column in self.columns:
            table_column = table.columns.get(ColumnKey(column.name))
            if table_column is None:
                continue
            table_column.label = self.header_label(column, marker(column.name))
        table.refresh()

    def render(
        self,
        table: DataTable,
        job: Optional[Job],
        filters: Sequence[Filter] = (),
    ) -> int:
        """Replace the table body with the job's sessions.

        Args:
            table: DataTable widget to render into
            job: Job to render
            filters: Row filters

        Returns:
            Number of rows rendered
        """
        table.clear()

        rows = self.build_rows(job, filters)
        for row in rows:
            table.add_row(*row)

        logger.debug(f"Rendered session table: rows={len(rows)}")
        return len(rows)
