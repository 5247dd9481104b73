"""
Task operations with project progress roll-up.

Project.progress is derived data: after any task save, delete or
completion toggle the owning project's progress is recomputed from its
current task set and written back. A project with no tasks keeps whatever
progress it had.
"""

import logging
from typing import Iterable, Optional

from ..context import StorageContext
from ..models.project import Project
from ..models.task import Task

logger = logging.getLogger(__name__)


def compute_progress(tasks: Iterable[Task]) -> Optional[int]:
    """
    Completed-task percentage, rounded half up.

    Returns None for an empty task set (progress must stay untouched).
    """
    tasks = list(tasks)
    total = len(tasks)
    if total == 0:
        return None
    completed = sum(1 for t in tasks if t.completed)
    # integer form of floor(100 * completed / total + 0.5)
    return (200 * completed + total) // (2 * total)


class TaskService:
    """Task CRUD that keeps project progress in sync."""

    def __init__(self, ctx: StorageContext):
        self.ctx = ctx

    async def recompute_progress(self, project_id: str) -> Optional[Project]:
        """
        Recompute and persist one project's progress.

        Returns the updated project, or None when the project does not
        exist or has no tasks.
        """
        tasks = await self.ctx.tasks.get_project_tasks(project_id)
        progress = compute_progress(tasks)
        if progress is None:
            logger.debug(f"Project {project_id} has no tasks, progress left unchanged")
            return None

        project = await self.ctx.projects.set_progress(project_id, progress)
        if project:
            logger.info(f"Project {project_id} progress -> {progress}%")
        return project

    async def save_task(self, task: Task) -> Task:
        """Save a task and roll progress up to its project (and the old one if it moved)."""
        previous = await self.ctx.tasks.get_by_id(task.id) if task.id else None
        saved = await self.ctx.tasks.save(task)

        await self.recompute_progress(saved.project_id)
        if previous and previous.project_id != saved.project_id:
            await self.recompute_progress(previous.project_id)
        return saved

    async def delete_task(self, task_id: str) -> bool:
        task = await self.ctx.tasks.get_by_id(task_id)
        deleted = await self.ctx.tasks.delete(task_id)
        if deleted and task:
            await self.recompute_progress(task.project_id)
        return deleted

    async def toggle_complete(self, task_id: str) -> Optional[Task]:
        """Flip a task's completed flag. Unknown ids return None."""
        updated = await self.ctx.tasks.update(
            task_id, lambda t: t.model_copy(update={"completed": not t.completed})
        )
        if updated:
            await self.recompute_progress(updated.project_id)
        return updated

    async def get_project_tasks(self, project_id: str, status: str = "all"):
        """Tasks of a project filtered by all / pending / completed."""
        tasks = await self.ctx.tasks.get_project_tasks(project_id)
        if status == "pending":
            return [t for t in tasks if not t.completed]
        if status == "completed":
            return [t for t in tasks if t.completed]
        return tasks
