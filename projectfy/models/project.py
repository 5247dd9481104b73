"""Project data model with embedded team and attachments."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .base import Record


class ProjectStatus(str, Enum):
    """Project lifecycle states."""
    PLANNING = "planning"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"


class Priority(str, Enum):
    """Priority levels shared by projects, tasks and appointments."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TeamMember(BaseModel):
    """A member of a project's team (not necessarily an app user)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str
    name: str
    role: str = ""


class Attachment(BaseModel):
    """Metadata for a file copied into the attachments directory."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str
    name: str
    type: str  # mime type
    uri: str
    size: int = 0
    created_at: Optional[str] = None


class Project(Record):
    """A project owned by a user."""

    name: str
    user_id: str
    description: Optional[str] = None
    company: Optional[str] = None

    status: ProjectStatus = ProjectStatus.PLANNING
    priority: Priority = Priority.MEDIUM
    progress: int = Field(default=0, ge=0, le=100)

    start_date: Optional[str] = None
    deadline: Optional[str] = None
    estimated_hours: Optional[float] = None

    tasks: List[str] = Field(default_factory=list)
    team: List[TeamMember] = Field(default_factory=list)
    attachments: List[Attachment] = Field(default_factory=list)
