"""autopfs-viz: terminal dashboard for autopfs jobs.

Follows a running job's status stream and, once the job is done, shows its
sessions as a sortable table.
"""

__version__ = "0.1.0"

from autopfs_viz.app import DashboardApp, run_dashboard

__all__ = ["__version__", "DashboardApp", "run_dashboard"]
