"""Note repository."""

from ...models.activity import Note
from ...storage.keys import StorageKeys
from .base import CollectionRepository


class NoteRepository(CollectionRepository[Note]):
    key = StorageKeys.NOTES
    model = Note
    parent_field = "project_id"
