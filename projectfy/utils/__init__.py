"""Utility modules for ProjectFy."""

from .datetime_utils import (
    get_local_tz,
    utc_now,
    to_iso,
    now_iso,
    parse_timestamp,
    local_date,
    is_overdue,
)
from .ids import new_id
from .passwords import PasswordHasher

__all__ = [
    "get_local_tz",
    "utc_now",
    "to_iso",
    "now_iso",
    "parse_timestamp",
    "local_date",
    "is_overdue",
    "new_id",
    "PasswordHasher",
]
