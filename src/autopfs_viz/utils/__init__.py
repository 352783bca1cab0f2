"""Utilities - errors, helpers, export."""

from autopfs_viz.utils.errors import ErrorHandler
from autopfs_viz.utils.export import ExportService

__all__ = ["ErrorHandler", "ExportService"]
