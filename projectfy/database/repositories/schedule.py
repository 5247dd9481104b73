"""Schedule event repository (agenda entries from the older calendar screen)."""

from ...models.activity import ScheduleEvent
from ...storage.keys import StorageKeys
from .base import CollectionRepository


class ScheduleEventRepository(CollectionRepository[ScheduleEvent]):
    key = StorageKeys.SCHEDULE
    model = ScheduleEvent
    parent_field = "user_id"
