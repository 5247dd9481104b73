"""
Report aggregation.

Builds the numbers behind the reports screen from a user's projects,
tasks and time logs:
- total hours logged
- task completion rate
- projects per status (non-empty buckets only)
- hours per project, capped to settings.report_top_projects entries

The hours-per-project cap keeps the first projects encountered in the
logs, not the largest ones, unless report_hours_order is "magnitude".
"""

import logging
from typing import Dict, List, Optional

from pydantic import BaseModel

from config import settings
from ..context import StorageContext
from ..models.project import Project, ProjectStatus
from ..models.task import Task
from ..models.tracking import TimeLog

logger = logging.getLogger(__name__)

OTHER_PROJECT = "Other"

STATUS_ORDER = [
    ProjectStatus.PLANNING,
    ProjectStatus.IN_PROGRESS,
    ProjectStatus.COMPLETED,
    ProjectStatus.ON_HOLD,
]


class StatusCount(BaseModel):
    status: ProjectStatus
    count: int


class ProjectHours(BaseModel):
    name: str
    hours: float


class Report(BaseModel):
    total_projects: int
    total_hours: float
    task_completion: float
    projects_by_status: List[StatusCount]
    hours_by_project: List[ProjectHours]


def status_histogram(projects: List[Project]) -> List[StatusCount]:
    counts: Dict[ProjectStatus, int] = {}
    for project in projects:
        counts[project.status] = counts.get(project.status, 0) + 1
    return [
        StatusCount(status=status, count=counts[status])
        for status in STATUS_ORDER
        if counts.get(status)
    ]


def task_completion_rate(tasks: List[Task]) -> float:
    if not tasks:
        return 0.0
    return sum(1 for t in tasks if t.completed) / len(tasks) * 100


def hours_by_project(
    projects: List[Project],
    logs: List[TimeLog],
    limit: Optional[int] = None,
    order: Optional[str] = None,
) -> List[ProjectHours]:
    """
    Sum logged hours per project name.

    Logs of projects not in the list are grouped under "Other". Projects
    sharing a name share a bucket.
    """
    limit = settings.report_top_projects if limit is None else limit
    order = order or settings.report_hours_order

    names = {p.id: p.name for p in projects}
    totals: Dict[str, float] = {}
    for log in logs:
        name = names.get(log.project_id, OTHER_PROJECT)
        totals[name] = totals.get(name, 0.0) + log.hours

    entries = [ProjectHours(name=name, hours=hours) for name, hours in totals.items()]
    if order == "magnitude":
        entries.sort(key=lambda e: e.hours, reverse=True)
    return entries[:limit]


def aggregate_report(
    projects: List[Project],
    tasks: List[Task],
    logs: List[TimeLog],
    limit: Optional[int] = None,
    order: Optional[str] = None,
) -> Report:
    return Report(
        total_projects=len(projects),
        total_hours=sum(log.duration for log in logs) / 3600,
        task_completion=task_completion_rate(tasks),
        projects_by_status=status_histogram(projects),
        hours_by_project=hours_by_project(projects, logs, limit, order),
    )


class ReportService:
    """Loads a user's data and aggregates it."""

    def __init__(self, ctx: StorageContext):
        self.ctx = ctx

    async def build_report(self, user_id: str) -> Report:
        projects = await self.ctx.projects.get_user_projects(user_id)
        tasks = await self.ctx.tasks.get_user_tasks(user_id)
        logs = await self.ctx.time_logs.get_user_logs(user_id)

        report = aggregate_report(projects, tasks, logs)
        logger.debug(
            f"Report for {user_id}: {report.total_projects} projects, "
            f"{report.total_hours:.1f}h, {report.task_completion:.0f}% tasks done"
        )
        return report
