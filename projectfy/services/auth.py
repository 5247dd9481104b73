"""
Session and account handling.

The session is two stored values: an opaque token marker and a copy of the
signed-in user. The token is not a credential; it only says "someone is
signed in on this device". Passwords go through PasswordHasher and are
never stored or compared in plaintext.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from config import settings
from ..context import StorageContext
from ..models.user import User, UserRole, UserSettings, default_user_settings
from ..storage.keys import StorageKeys
from ..utils.datetime_utils import now_iso
from ..utils.passwords import PasswordHasher

logger = logging.getLogger(__name__)

SESSION_TOKEN = "logged_in"


def _parse_hours(value: Any, default: int) -> int:
    """Lenient integer parse for form input, falling back to default."""
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return parsed or default


class AuthService:
    """Current-user session plus register / login / logout."""

    def __init__(self, ctx: StorageContext, hasher: Optional[PasswordHasher] = None):
        self.ctx = ctx
        self.hasher = hasher or PasswordHasher()

    # ==================== SESSION ====================

    async def get_current_user(self) -> Optional[User]:
        data = await self.ctx.store.get(StorageKeys.CURRENT_USER)
        if not data:
            return None
        try:
            return User.from_json(data)
        except ValidationError as e:
            logger.error(f"Stored current user is malformed: {e}")
            return None

    async def set_current_user(self, user: User) -> None:
        await self.ctx.store.save(StorageKeys.CURRENT_USER, user.to_json())

    async def get_user_token(self) -> Optional[str]:
        return await self.ctx.store.get_raw(StorageKeys.USER_TOKEN)

    async def set_user_token(self, token: str) -> None:
        await self.ctx.store.set_raw(StorageKeys.USER_TOKEN, token)

    async def remove_auth_data(self) -> None:
        await self.ctx.store.remove_many([StorageKeys.USER_TOKEN, StorageKeys.CURRENT_USER])

    async def load_session(self) -> Optional[User]:
        """
        Restore the signed-in user at startup.

        Token and user must both be present; if either is missing both are
        cleared so the session is never half there.
        """
        token = await self.get_user_token()
        user = await self.get_current_user()
        if token and user:
            return user

        await self.remove_auth_data()
        return None

    async def _start_session(self, user: User) -> None:
        await self.set_user_token(SESSION_TOKEN)
        await self.set_current_user(user)

    # ==================== ACCOUNTS ====================

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.COLLABORATOR,
        weekly_hours: Any = None,
        daily_hours: Any = None,
    ) -> Optional[User]:
        """
        Create an account and sign it in.

        Returns None when the email is already taken.
        """
        if await self.ctx.users.get_by_email(email):
            logger.info(f"Registration rejected, email already in use: {email}")
            return None

        user = User(
            id=self.ctx.id_factory(),
            name=name,
            email=email,
            password=self.hasher.hash(password),
            role=role,
            weekly_hours=_parse_hours(weekly_hours, settings.default_weekly_hours),
            daily_hours=_parse_hours(daily_hours, settings.default_daily_hours),
            created_at=now_iso(self.ctx.clock),
            settings=default_user_settings(),
        )
        saved = await self.ctx.users.save(user)
        await self._start_session(saved)
        logger.info(f"Registered user {saved.id}")
        return saved

    async def login(self, email: str, password: str) -> Optional[User]:
        """Check credentials and sign in. Returns None on failure."""
        user = await self.ctx.users.get_by_email(email)
        if not user or not self.hasher.verify(password, user.password):
            logger.info(f"Login failed for {email}")
            return None

        if self.hasher.needs_rehash(user.password):
            user = await self.ctx.users.save(
                user.model_copy(update={"password": self.hasher.hash(password)})
            )
            logger.info(f"Upgraded stored password hash for user {user.id}")

        await self._start_session(user)
        return user

    async def logout(self) -> None:
        await self.remove_auth_data()

    async def update_user(self, changes: Dict[str, Any]) -> Optional[User]:
        """Apply a partial update to the signed-in user."""
        current = await self.get_current_user()
        if not current:
            return None

        if "password" in changes and changes["password"]:
            changes = {**changes, "password": self.hasher.hash(changes["password"])}

        updated = await self.ctx.users.save(current.model_copy(update=changes))
        await self.set_current_user(updated)
        return updated

    async def update_user_settings(self, user_id: str, user_settings: UserSettings) -> Optional[User]:
        """Store new settings on a user, mirroring them onto the session copy."""
        updated = await self.ctx.users.update_settings(user_id, user_settings)
        if not updated:
            return None

        current = await self.get_current_user()
        if current and current.id == user_id:
            await self.set_current_user(
                current.model_copy(update={"settings": user_settings, "updated_at": updated.updated_at})
            )
        return updated
