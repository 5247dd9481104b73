"""Task repository."""

from typing import List

from ...models.task import Task
from ...storage.keys import StorageKeys
from .base import CollectionRepository


class TaskRepository(CollectionRepository[Task]):
    """Repository for tasks. Parent is the project; tasks also carry userId."""

    key = StorageKeys.TASKS
    model = Task
    parent_field = "project_id"

    async def get_project_tasks(self, project_id: str) -> List[Task]:
        return await self.get_by_parent(project_id)

    async def get_user_tasks(self, user_id: str) -> List[Task]:
        return await self.get_by_parent(user_id, field="user_id")
