"""Notes, appointments and legacy schedule events."""

from enum import Enum
from typing import Optional

from .base import Record
from .project import Priority


class Note(Record):
    """Free-form note attached to a project."""

    project_id: str
    user_id: str
    title: str = ""
    content: str = ""


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    DONE = "done"
    CANCELED = "canceled"


class Appointment(Record):
    """Calendar appointment, optionally tied to a project."""

    title: str
    date: str  # YYYY-MM-DD
    time: str  # HH:mm
    user_id: str
    project_id: Optional[str] = None
    description: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    status: AppointmentStatus = AppointmentStatus.SCHEDULED


class ScheduleEventType(str, Enum):
    MEETING = "meeting"
    DEADLINE = "deadline"
    REVIEW = "review"
    OTHER = "other"


class ScheduleEvent(Record):
    """Agenda entry from the older schedule screen."""

    title: str
    start_time: str
    end_time: str
    user_id: str
    project_id: Optional[str] = None
    description: Optional[str] = None
    type: ScheduleEventType = ScheduleEventType.OTHER
