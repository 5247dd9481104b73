"""
Repository classes for the persisted collections.

Each repository owns one collection key and shares the generic
load-all / mutate / write-all behaviour of CollectionRepository.
"""

from .base import CollectionRepository
from .users import UserRepository
from .projects import ProjectRepository
from .tasks import TaskRepository
from .notes import NoteRepository
from .appointments import AppointmentRepository
from .time_logs import TimeLogRepository
from .purchases import PurchaseRepository
from .alerts import AlertRepository
from .schedule import ScheduleEventRepository

__all__ = [
    "CollectionRepository",
    "UserRepository",
    "ProjectRepository",
    "TaskRepository",
    "NoteRepository",
    "AppointmentRepository",
    "TimeLogRepository",
    "PurchaseRepository",
    "AlertRepository",
    "ScheduleEventRepository",
]
