"""
Dashboard figures.

Occupancy is a rough heuristic: the share of an assumed number of
concurrent projects (settings.occupancy_capacity) that are in progress.
It does not look at hours or workload.
"""

import logging
from typing import Iterable, Optional

from pydantic import BaseModel

from config import settings
from ..context import StorageContext
from ..models.project import Project, ProjectStatus

logger = logging.getLogger(__name__)


def calculate_occupation(projects: Iterable[Project], capacity: Optional[int] = None) -> float:
    """min(100, 100 * in-progress projects / capacity); 0 with no projects."""
    projects = list(projects)
    capacity = settings.occupancy_capacity if capacity is None else capacity
    if not projects or capacity <= 0:
        return 0.0
    active = sum(1 for p in projects if p.status == ProjectStatus.IN_PROGRESS)
    return min(100.0, active / capacity * 100)


def occupation_level(percentage: float) -> str:
    """Traffic-light bucket the dashboard colours the gauge with."""
    if percentage >= 90:
        return "critical"
    if percentage >= 70:
        return "warning"
    return "ok"


class Statistics(BaseModel):
    total_projects: int
    completed_projects: int
    total_tasks: int
    completed_tasks: int
    hours_worked: float
    occupation_percentage: float


class DashboardService:
    """Per-user dashboard numbers, recomputed from storage on every call."""

    def __init__(self, ctx: StorageContext, capacity: Optional[int] = None):
        self.ctx = ctx
        self.capacity = settings.occupancy_capacity if capacity is None else capacity

    async def calculate_occupation(self, user_id: str) -> float:
        projects = await self.ctx.projects.get_user_projects(user_id)
        return calculate_occupation(projects, self.capacity)

    async def get_statistics(self, user_id: str) -> Statistics:
        projects = await self.ctx.projects.get_user_projects(user_id)
        tasks = await self.ctx.tasks.get_user_tasks(user_id)
        logs = await self.ctx.time_logs.get_user_logs(user_id)

        return Statistics(
            total_projects=len(projects),
            completed_projects=sum(1 for p in projects if p.status == ProjectStatus.COMPLETED),
            total_tasks=len(tasks),
            completed_tasks=sum(1 for t in tasks if t.completed),
            hours_worked=sum(log.duration for log in logs) / 3600,
            occupation_percentage=calculate_occupation(projects, self.capacity),
        )
