"""
Pytest configuration and shared fixtures.
"""

import itertools
from datetime import datetime, timedelta

import pytest
import pytz

from projectfy.context import StorageContext
from projectfy.models import Project, ProjectStatus, Task, User
from projectfy.storage import AttachmentStore, KeyValueStore, MemoryBackend


class FakeClock:
    """Deterministic, manually advanced clock."""

    def __init__(self, start: datetime = datetime(2026, 3, 10, 12, 0, 0, tzinfo=pytz.UTC)):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return KeyValueStore(backend)


@pytest.fixture
def attachments_dir(tmp_path):
    return tmp_path / "attachments"


@pytest.fixture
def ctx(store, clock, id_factory, attachments_dir):
    """Storage context over an in-memory backend."""
    return StorageContext(
        store,
        attachments=AttachmentStore(attachments_dir),
        clock=clock,
        id_factory=id_factory,
    )


@pytest.fixture
def sample_user():
    return User(id="user-1", name="Ana Souza", email="ana@example.com")


@pytest.fixture
def sample_project():
    return Project(
        id="proj-1",
        name="Website Redesign",
        user_id="user-1",
        status=ProjectStatus.PLANNING,
        start_date="2026-03-01",
        deadline="2026-06-30",
    )


@pytest.fixture
def make_task():
    """Factory for tasks owned by user-1."""
    def _make(task_id: str, project_id: str = "proj-1", completed: bool = False, **kwargs) -> Task:
        return Task(
            id=task_id,
            title=f"Task {task_id}",
            project_id=project_id,
            user_id=kwargs.pop("user_id", "user-1"),
            completed=completed,
            **kwargs,
        )
    return _make
