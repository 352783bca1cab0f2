"""CSV export of a job's sessions."""

from __future__ import annotations

import csv
import errno
from pathlib import Path

from loguru import logger

from autopfs_viz.models import CSV_HEADER, Job


class ExportService:
    """Writes job data to disk."""

    @staticmethod
    def export_sessions_to_csv(job: Job, filepath: Path) -> int:
        """Export a job's sessions as CSV, one ``Session.record()`` per row.

        Args:
            job: Job to export
            filepath: Output file path

        Returns:
            Number of sessions written

        Raises:
            PermissionError: If lacking write permissions
            OSError: If disk full or other OS-level error
        """
        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)

            with filepath.open("w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f)
                writer.writerow(CSV_HEADER)
                for session in job.sessions:
                    writer.writerow(session.record())

            logger.info(f"Exported {len(job.sessions)} sessions to CSV: {filepath}")
            return len(job.sessions)

        except PermissionError as exc:
            logger.error(f"Permission denied writing to {filepath}: {exc}")
            raise PermissionError(f"Cannot write to {filepath}: Permission denied") from exc
        except OSError as exc:
            if exc.errno == errno.ENOSPC:
                logger.error(f"Disk full while writing to {filepath}")
                raise OSError("Disk full - cannot write export file") from exc
            logger.error(f"OS error writing to {filepath}: {exc}")
            raise OSError(f"Cannot write to {filepath}: {exc}") from exc
