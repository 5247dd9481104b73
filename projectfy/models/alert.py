"""In-app alert model."""

from enum import Enum
from typing import Optional

from .base import Record


class AlertType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    SUCCESS = "success"


class Alert(Record):
    """Message shown in the alerts screen."""

    user_id: str
    message: str
    type: AlertType = AlertType.INFO
    read: bool = False
    project_id: Optional[str] = None
    task_id: Optional[str] = None
    category: Optional[str] = None  # deadline, status, task, system
