"""Time logs and purchases recorded against a project."""

from enum import Enum
from typing import Optional

from .base import Record


class TimeLog(Record):
    """Worked time on a project. Duration is in seconds."""

    project_id: str
    user_id: str
    start: str
    end: Optional[str] = None
    duration: int = 0
    description: Optional[str] = None
    synced: bool = False  # no sync engine reads this

    @property
    def hours(self) -> float:
        return self.duration / 3600


class PurchaseStatus(str, Enum):
    PLANNED = "planned"
    PURCHASED = "purchased"


class Purchase(Record):
    """Material or service bought for a project."""

    project_id: str
    item: str
    quantity: float = 1
    price: float = 0
    status: PurchaseStatus = PurchaseStatus.PLANNED
    synced: bool = False  # no sync engine reads this

    @property
    def total(self) -> float:
        return self.quantity * self.price
