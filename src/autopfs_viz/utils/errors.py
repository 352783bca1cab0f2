"""Centralized error handling for the dashboard.

Stream transport errors are logged and absorbed by the reconnect loop; fetch
and document errors end in the result screen's error banner.
"""

from __future__ import annotations

from typing import List, Optional

from loguru import logger
from rich.markup import escape


class TUIError(Exception):
    """Base exception for dashboard errors."""
    pass


class APIError(TUIError):
    """Fetching the job result failed."""
    pass


class ModelError(TUIError):
    """The job document is missing a required part."""
    pass


class ErrorHandler:
    """Centralized error handling."""

    @staticmethod
    def log_and_continue(error: Exception, context: str) -> None:
        """Log error and continue execution.

        Args:
            error: The exception that occurred
            context: Context string (e.g., "status stream")
        """
        logger.warning(f"Error in {context}: {type(error).__name__}: {error}")

    @staticmethod
    def create_error_message(
        title: str,
        error: Exception,
        suggestions: Optional[List[str]] = None
    ) -> str:
        """Create formatted error message for display.

        Args:
            title: Error title
            error: The exception
            suggestions: Optional list of suggestions

        Returns:
            Rich markup for a Static widget
        """
        msg = f"[bold red]{escape(title)}[/bold red]\n\n"
        msg += f"[red]{escape(str(error))}[/red]\n"

        if suggestions:
            msg += "\n[bold]Suggestions:[/bold]\n"
            for suggestion in suggestions:
                msg += f"  • {escape(suggestion)}\n"

        return msg
