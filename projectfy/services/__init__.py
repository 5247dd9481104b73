"""Services built on top of the repositories."""

from .tasks import TaskService, compute_progress
from .projects import ProjectService
from .dashboard import DashboardService, Statistics, calculate_occupation
from .reports import ReportService, Report, aggregate_report
from .auth import AuthService
from .notifications import NotificationService, log_notifier
from .backup import BackupService
from .integrity import IntegrityChecker

__all__ = [
    "TaskService",
    "compute_progress",
    "ProjectService",
    "DashboardService",
    "Statistics",
    "calculate_occupation",
    "ReportService",
    "Report",
    "aggregate_report",
    "AuthService",
    "NotificationService",
    "log_notifier",
    "BackupService",
    "IntegrityChecker",
]
