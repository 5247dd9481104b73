"""Alert repository."""

from typing import List, Optional

from ...models.alert import Alert
from ...storage.keys import StorageKeys
from .base import CollectionRepository


class AlertRepository(CollectionRepository[Alert]):
    key = StorageKeys.ALERTS
    model = Alert
    parent_field = "user_id"

    async def get_user_alerts(self, user_id: str) -> List[Alert]:
        return await self.get_by_parent(user_id)

    async def mark_as_read(self, alert_id: str) -> Optional[Alert]:
        return await self.update(alert_id, lambda a: a.model_copy(update={"read": True}))

    async def unread_count(self, user_id: str) -> int:
        return sum(1 for a in await self.get_user_alerts(user_id) if not a.read)
