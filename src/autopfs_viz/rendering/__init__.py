"""Rendering logic - columns and the session table."""

from autopfs_viz.rendering.columns import COLUMNS, Column, Filter
from autopfs_viz.rendering.table_renderer import TableRenderer

__all__ = ["COLUMNS", "Column", "Filter", "TableRenderer"]
