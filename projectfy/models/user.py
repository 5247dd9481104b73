"""User data model."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .base import Record


class UserRole(str, Enum):
    """User roles."""
    ADMIN = "admin"
    COLLABORATOR = "collaborator"


class NotificationSettings(BaseModel):
    """Which local notifications a user wants."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    enabled: bool = True
    deadlines: bool = True
    tasks: bool = True
    appointments: bool = True


class UserSettings(BaseModel):
    """Per-user preferences."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    theme: str = "system"  # light, dark, system
    language: str = "pt-BR"


def default_user_settings() -> UserSettings:
    """Settings given to a freshly registered user."""
    return UserSettings()


class User(Record):
    """Application user. Root of the ownership tree."""

    name: str
    email: str
    password: Optional[str] = None  # scrypt hash, see utils.passwords
    role: UserRole = UserRole.COLLABORATOR
    weekly_hours: int = 40
    daily_hours: int = 8
    settings: Optional[UserSettings] = None

    projects: List[str] = Field(default_factory=list)
    tasks: List[str] = Field(default_factory=list)
