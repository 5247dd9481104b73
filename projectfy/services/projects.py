"""
Project lifecycle: saving, cascading delete and attachments.

Deleting a project is the one place referential integrity is enforced.
The project's attachment files are removed first (a failing file delete is
logged and skipped), then the project record, then every task, note,
appointment, time log and purchase that points at it.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from ..context import StorageContext
from ..database.exceptions import EntityNotFoundError
from ..models.project import Attachment, Project
from ..utils.datetime_utils import now_iso

logger = logging.getLogger(__name__)


class ProjectService:
    """Project operations spanning several collections."""

    def __init__(self, ctx: StorageContext):
        self.ctx = ctx

    async def save_project(self, project: Project) -> Project:
        return await self.ctx.projects.save(project)

    async def delete_project(self, project_id: str) -> Dict[str, int]:
        """
        Delete a project and everything that belongs to it.

        Returns how many records were removed per collection. Deleting an
        unknown project still sweeps the child collections.
        """
        project = await self.ctx.projects.get_by_id(project_id)

        files_removed = 0
        if project and project.attachments:
            for attachment in project.attachments:
                if await self.ctx.attachments.delete_file(attachment.uri):
                    files_removed += 1

        removed = {
            "projects": 1 if await self.ctx.projects.delete(project_id) else 0,
            "tasks": await self.ctx.tasks.delete_by_parent(project_id),
            "notes": await self.ctx.notes.delete_by_parent(project_id),
            "appointments": await self.ctx.appointments.delete_by_parent(project_id, field="project_id"),
            "time_logs": await self.ctx.time_logs.delete_by_parent(project_id),
            "purchases": await self.ctx.purchases.delete_by_parent(project_id),
            "attachment_files": files_removed,
        }

        logger.info(f"Deleted project {project_id}: {removed}")
        return removed

    async def save_attachment(
        self,
        project_id: str,
        source: Union[str, Path],
        name: str,
        mime_type: str,
        size: int,
    ) -> Attachment:
        """
        Copy a file into the attachments directory and bind it to a project.

        Raises EntityNotFoundError (after removing the copy) when the
        project does not exist.
        """
        attachment_id = self.ctx.id_factory()
        target = await self.ctx.attachments.copy_in(source, attachment_id, name)

        attachment = Attachment(
            id=attachment_id,
            name=name,
            type=mime_type,
            uri=str(target),
            size=size,
            created_at=now_iso(self.ctx.clock),
        )

        updated = await self.ctx.projects.add_attachment(project_id, attachment)
        if updated is None:
            await self.ctx.attachments.delete_file(str(target))
            raise EntityNotFoundError(f"Project {project_id} not found")

        logger.info(f"Attached {name} to project {project_id}")
        return attachment

    async def delete_attachment(self, project_id: str, attachment_id: str) -> bool:
        """Remove the backing file (best-effort) and the attachment record."""
        project = await self.ctx.projects.get_by_id(project_id)
        if not project:
            return False

        attachment: Optional[Attachment] = next(
            (a for a in project.attachments if a.id == attachment_id), None
        )
        if not attachment:
            return False

        await self.ctx.attachments.delete_file(attachment.uri)
        await self.ctx.projects.remove_attachment(project_id, attachment_id)
        return True
