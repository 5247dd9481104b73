"""Appointment repository."""

from typing import List

from ...models.activity import Appointment
from ...storage.keys import StorageKeys
from .base import CollectionRepository


class AppointmentRepository(CollectionRepository[Appointment]):
    """Appointments belong to a user and optionally to a project."""

    key = StorageKeys.APPOINTMENTS
    model = Appointment
    parent_field = "user_id"

    async def get_on_date(self, user_id: str, day: str) -> List[Appointment]:
        """A user's appointments for one YYYY-MM-DD day, ordered by time."""
        items = [a for a in await self.get_by_parent(user_id) if a.date == day]
        return sorted(items, key=lambda a: a.time)
