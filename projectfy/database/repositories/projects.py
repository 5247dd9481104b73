"""Project repository."""

import logging
from typing import List

from ...models.project import Attachment, Project, ProjectStatus
from ...storage.keys import StorageKeys
from .base import CollectionRepository

logger = logging.getLogger(__name__)


class ProjectRepository(CollectionRepository[Project]):
    """Repository for project records. Owned by a user."""

    key = StorageKeys.PROJECTS
    model = Project
    parent_field = "user_id"

    async def get_user_projects(self, user_id: str) -> List[Project]:
        return await self.get_by_parent(user_id)

    async def get_active(self, user_id: str) -> List[Project]:
        """Projects currently in progress for a user."""
        return [
            p for p in await self.get_user_projects(user_id)
            if p.status == ProjectStatus.IN_PROGRESS
        ]

    async def set_progress(self, project_id: str, progress: int):
        return await self.update(
            project_id, lambda p: p.model_copy(update={"progress": progress})
        )

    async def add_attachment(self, project_id: str, attachment: Attachment):
        return await self.update(
            project_id,
            lambda p: p.model_copy(update={"attachments": [*p.attachments, attachment]}),
        )

    async def remove_attachment(self, project_id: str, attachment_id: str):
        def _remove(project: Project):
            kept = [a for a in project.attachments if a.id != attachment_id]
            if len(kept) == len(project.attachments):
                return None
            return project.model_copy(update={"attachments": kept})

        return await self.update(project_id, _remove)
