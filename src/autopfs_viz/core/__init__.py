"""Core business logic and infrastructure."""

from autopfs_viz.core.client import ApiClient
from autopfs_viz.core.config import Config
from autopfs_viz.core.sorting import SortEngine
from autopfs_viz.core.state import StateManager, StreamState
from autopfs_viz.core.stream import StreamClient, StreamMessage

__all__ = [
    "ApiClient",
    "Config",
    "SortEngine",
    "StateManager",
    "StreamState",
    "StreamClient",
    "StreamMessage",
]
