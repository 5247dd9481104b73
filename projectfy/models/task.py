"""Task data model."""

from typing import Optional

from .base import Record
from .project import Priority


class Task(Record):
    """A unit of work inside a project."""

    title: str
    project_id: str
    user_id: str
    description: Optional[str] = None

    completed: bool = False
    priority: Priority = Priority.MEDIUM
    due_date: Optional[str] = None
    assigned_to: Optional[str] = None  # TeamMember.id

    hours_estimated: Optional[float] = None
    hours_spent: Optional[float] = None
