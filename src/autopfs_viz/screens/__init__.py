"""UI screens."""

from autopfs_viz.screens.results import ResultsScreen
from autopfs_viz.screens.status import StatusScreen

__all__ = ["ResultsScreen", "StatusScreen"]
