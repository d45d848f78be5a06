"""Application services."""

from .bulk_actions import BulkActionCoordinator
from .console import Console
from .dashboard import DashboardAggregator
from .history import ImportHistory
from .imports import CsvImportEngine
from .job_list import JobListController
from .jobs import JobEditor
from .notifications import Notification, NotificationChannel

__all__ = [
    "BulkActionCoordinator",
    "Console",
    "CsvImportEngine",
    "DashboardAggregator",
    "ImportHistory",
    "JobEditor",
    "JobListController",
    "Notification",
    "NotificationChannel",
]
