"""
User repository.

Users are the root of the ownership tree. Deleting a user does not touch
the user's projects or other records; see IntegrityChecker for finding the
records such a delete leaves behind.
"""

import logging
from typing import Optional

from ...models.user import User, UserSettings
from ...storage.keys import StorageKeys
from .base import CollectionRepository

logger = logging.getLogger(__name__)


class UserRepository(CollectionRepository[User]):
    """Repository for user operations."""

    key = StorageKeys.USERS
    model = User

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)."""
        email = email.strip().lower()
        for user in await self.get_all():
            if user.email.strip().lower() == email:
                return user
        return None

    async def update_settings(self, user_id: str, settings: UserSettings) -> Optional[User]:
        """Replace a user's settings. Unknown user ids are ignored."""
        updated = await self.update(
            user_id, lambda u: u.model_copy(update={"settings": settings})
        )
        if updated is None:
            logger.debug(f"update_settings: user {user_id} not found")
        return updated
