"""Sort engine for the session table.

Header activation toggles or sets the sort column in the shared state and
re-orders the job's sessions in place with a stable sort. Descending order
swaps the operands handed to the comparator instead of negating its result,
and passes the direction through, so multi-valued columns switch from
minimum to maximum keys.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, Optional, Sequence

from loguru import logger

from autopfs_viz.core.state import StateManager
from autopfs_viz.rendering.columns import COLUMNS, Column, get_column

SORT_MARK_ASC = " ▲"
SORT_MARK_DESC = " ▼"


class SortEngine:
    """Applies header clicks to the shared sort state and session order."""

    def __init__(
        self,
        state: StateManager,
        columns: Sequence[Column] = COLUMNS,
        redraw: Optional[Callable[[], None]] = None,
    ) -> None:
        """Initialize sort engine.

        Args:
            state: Shared application state (job, sort column, direction)
            columns: Column registry
            redraw: Called after every re-order
        """
        self.state = state
        self.columns = columns
        self.redraw = redraw

    def on_column_activated(self, column: Column | str) -> None:
        """Handle a click on a column header.

        Same column: invert the direction. Other column: make it the sort
        column, ascending. Then re-order and redraw.
        """
        if isinstance(column, str):
            found = get_column(column, self.columns)
            if found is None:
                logger.warning(f"Sort requested on unknown column {column!r}")
                return
            column = found

        if self.state.sort_column == column.name:
            self.state.sort_ascending = not self.state.sort_ascending
        else:
            self.state.sort_column = column.name
            self.state.sort_ascending = True

        logger.debug(
            f"Sorting by {column.name} "
            f"({'ascending' if self.state.sort_ascending else 'descending'})"
        )
        self.sort_sessions(column)

        if self.redraw is not None:
            self.redraw()

    def sort_sessions(self, column: Column) -> None:
        """Re-order the job's sessions by the current direction."""
        job = self.state.job
        if job is None:
            return

        compare = column.compare
        if self.state.sort_ascending:
            key = cmp_to_key(lambda a, b: compare(a, b, True))
        else:
            key = cmp_to_key(lambda a, b: compare(b, a, False))

        job.sessions.sort(key=key)

    def sort_marker(self, column_name: str) -> str:
        """Header suffix showing the active sort direction."""
        if column_name != self.state.sort_column:
            return ""
        return SORT_MARK_ASC if self.state.sort_ascending else SORT_MARK_DESC
