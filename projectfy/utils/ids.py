"""Record id generation."""

import uuid
from typing import Callable

IdFactory = Callable[[], str]


def new_id() -> str:
    """Random UUID4 string, the id format used for every record."""
    return str(uuid.uuid4())
