from .base import Record
from .user import User, UserRole, UserSettings, NotificationSettings, default_user_settings
from .project import Project, ProjectStatus, Priority, TeamMember, Attachment
from .task import Task
from .activity import Note, Appointment, AppointmentStatus, ScheduleEvent, ScheduleEventType
from .tracking import TimeLog, Purchase, PurchaseStatus
from .alert import Alert, AlertType

__all__ = [
    "Record",
    "User",
    "UserRole",
    "UserSettings",
    "NotificationSettings",
    "default_user_settings",
    "Project",
    "ProjectStatus",
    "Priority",
    "TeamMember",
    "Attachment",
    "Task",
    "Note",
    "Appointment",
    "AppointmentStatus",
    "ScheduleEvent",
    "ScheduleEventType",
    "TimeLog",
    "Purchase",
    "PurchaseStatus",
    "Alert",
    "AlertType",
]
