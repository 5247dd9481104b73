"""Purchase repository."""

from typing import Optional

from ...models.tracking import Purchase
from ...storage.keys import StorageKeys
from .base import CollectionRepository


class PurchaseRepository(CollectionRepository[Purchase]):
    key = StorageKeys.PURCHASES
    model = Purchase
    parent_field = "project_id"

    def prepare(self, entity: Purchase, existing: Optional[Purchase], now: str) -> Purchase:
        entity = entity.model_copy(update={"synced": False})
        return super().prepare(entity, existing, now)

    async def project_total(self, project_id: str) -> float:
        """Sum of quantity * price over a project's purchases."""
        return sum(p.total for p in await self.get_by_parent(project_id))
