"""
Tests for projectfy/services/dashboard.py
"""

import pytest

from projectfy.models import Project, ProjectStatus, TimeLog
from projectfy.services.dashboard import (
    DashboardService,
    calculate_occupation,
    occupation_level,
)


def _projects(*statuses):
    return [
        Project(id=f"p{i}", name=f"P{i}", user_id="user-1", status=status)
        for i, status in enumerate(statuses)
    ]


class TestCalculateOccupation:
    """Tests for calculate_occupation function."""

    def test_no_projects(self):
        assert calculate_occupation([], capacity=5) == 0

    def test_three_active_of_five(self):
        projects = _projects(*[ProjectStatus.IN_PROGRESS] * 3, ProjectStatus.COMPLETED)
        assert calculate_occupation(projects, capacity=5) == 60

    def test_capped_at_hundred(self):
        projects = _projects(*[ProjectStatus.IN_PROGRESS] * 6)
        assert calculate_occupation(projects, capacity=5) == 100

    def test_only_in_progress_counts(self):
        projects = _projects(ProjectStatus.PLANNING, ProjectStatus.ON_HOLD, ProjectStatus.COMPLETED)
        assert calculate_occupation(projects, capacity=5) == 0

    def test_zero_capacity_is_not_default(self):
        projects = _projects(ProjectStatus.IN_PROGRESS)
        assert calculate_occupation(projects, capacity=0) == 0

    def test_custom_capacity(self):
        projects = _projects(ProjectStatus.IN_PROGRESS)
        assert calculate_occupation(projects, capacity=4) == 25


class TestOccupationLevel:

    @pytest.mark.parametrize("value,level", [(0, "ok"), (69.9, "ok"), (70, "warning"), (90, "critical"), (100, "critical")])
    def test_levels(self, value, level):
        assert occupation_level(value) == level


class TestDashboardService:

    @pytest.mark.asyncio
    async def test_occupation_for_user(self, ctx):
        for project in _projects(ProjectStatus.IN_PROGRESS, ProjectStatus.IN_PROGRESS, ProjectStatus.PLANNING):
            await ctx.projects.save(project)
        await ctx.projects.save(
            Project(id="x", name="Someone else", user_id="user-2", status=ProjectStatus.IN_PROGRESS)
        )

        assert await DashboardService(ctx, capacity=5).calculate_occupation("user-1") == 40

    @pytest.mark.asyncio
    async def test_statistics(self, ctx, make_task):
        for project in _projects(ProjectStatus.IN_PROGRESS, ProjectStatus.COMPLETED):
            await ctx.projects.save(project)
        await ctx.tasks.save(make_task("t1", project_id="p0", completed=True))
        await ctx.tasks.save(make_task("t2", project_id="p0"))
        await ctx.time_logs.save(TimeLog(
            id="l1", project_id="p0", user_id="user-1", start="2026-03-10T09:00:00.000Z", duration=5400,
        ))

        stats = await DashboardService(ctx, capacity=5).get_statistics("user-1")

        assert stats.total_projects == 2
        assert stats.completed_projects == 1
        assert stats.total_tasks == 2
        assert stats.completed_tasks == 1
        assert stats.hours_worked == 1.5
        assert stats.occupation_percentage == 20

    @pytest.mark.asyncio
    async def test_service_keeps_explicit_zero_capacity(self, ctx):
        await ctx.projects.save(
            Project(id="p1", name="A", user_id="user-1", status=ProjectStatus.IN_PROGRESS)
        )
        service = DashboardService(ctx, capacity=0)

        assert service.capacity == 0
        assert await service.calculate_occupation("user-1") == 0

    @pytest.mark.asyncio
    async def test_statistics_empty_user(self, ctx):
        stats = await DashboardService(ctx).get_statistics("nobody")

        assert stats.total_projects == 0
        assert stats.hours_worked == 0
        assert stats.occupation_percentage == 0
