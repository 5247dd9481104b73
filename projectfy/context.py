"""
Storage context.

Bundles one KeyValueStore with every repository and the attachment store,
so services receive their collaborators explicitly instead of reaching for
module-level singletons. Tests build a context over a MemoryBackend; the
app builds one from settings with get_context().
"""

import logging
from typing import Optional

from .database.repositories import (
    UserRepository,
    ProjectRepository,
    TaskRepository,
    NoteRepository,
    AppointmentRepository,
    TimeLogRepository,
    PurchaseRepository,
    AlertRepository,
    ScheduleEventRepository,
)
from .storage import AttachmentStore, KeyValueStore, StorageBackend, create_backend
from .utils.datetime_utils import Clock, utc_now
from .utils.ids import IdFactory, new_id

logger = logging.getLogger(__name__)


class StorageContext:
    """Store, repositories and collaborators for one app instance."""

    def __init__(
        self,
        store: KeyValueStore,
        attachments: Optional[AttachmentStore] = None,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        self.store = store
        self.attachments = attachments or AttachmentStore()
        self.clock = clock or utc_now
        self.id_factory = id_factory or new_id

        repo_args = (store, self.clock, self.id_factory)
        self.users = UserRepository(*repo_args)
        self.projects = ProjectRepository(*repo_args)
        self.tasks = TaskRepository(*repo_args)
        self.notes = NoteRepository(*repo_args)
        self.appointments = AppointmentRepository(*repo_args)
        self.time_logs = TimeLogRepository(*repo_args)
        self.purchases = PurchaseRepository(*repo_args)
        self.alerts = AlertRepository(*repo_args)
        self.schedule = ScheduleEventRepository(*repo_args)

    @classmethod
    def from_backend(cls, backend: StorageBackend, **kwargs) -> "StorageContext":
        return cls(KeyValueStore(backend), **kwargs)

    def now(self):
        return self.clock()

    async def close(self) -> None:
        await self.store.close()


# Singleton
_context: Optional[StorageContext] = None


def get_context() -> StorageContext:
    """Get the app-wide context built from settings."""
    global _context
    if _context is None:
        _context = StorageContext.from_backend(create_backend())
        logger.info(f"Storage context created ({type(_context.store.backend).__name__})")
    return _context


async def close_context() -> None:
    global _context
    if _context:
        await _context.close()
        _context = None
