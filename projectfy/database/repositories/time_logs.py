"""
Repository for time logs.

Durations are stored in seconds. The synced flag is reset on every save;
nothing currently consumes it.
"""

from typing import List, Optional

from ...models.tracking import TimeLog
from ...storage.keys import StorageKeys
from .base import CollectionRepository


class TimeLogRepository(CollectionRepository[TimeLog]):
    key = StorageKeys.TIME_LOGS
    model = TimeLog
    parent_field = "project_id"

    def prepare(self, entity: TimeLog, existing: Optional[TimeLog], now: str) -> TimeLog:
        entity = entity.model_copy(update={"synced": False})
        return super().prepare(entity, existing, now)

    async def get_user_logs(self, user_id: str) -> List[TimeLog]:
        return await self.get_by_parent(user_id, field="user_id")

    async def get_project_logs(self, project_id: str) -> List[TimeLog]:
        """Project logs, most recent start first."""
        logs = await self.get_by_parent(project_id)
        return sorted(logs, key=lambda log: log.start, reverse=True)
