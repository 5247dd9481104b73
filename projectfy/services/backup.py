"""
Snapshot export, import and full wipe.

A snapshot is a plain dict of JSON arrays, one per collection, suitable
for json.dump. Export returns the stored items untouched but leaves out
malformed ones, which stay behind for the repositories to quarantine.
Import checks every record against its model before anything is written,
then stores the snapshot items as given, replacing only the collections
present in the snapshot.
"""

import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from ..context import StorageContext
from ..database.exceptions import RecordValidationError
from ..database.repositories import CollectionRepository
from ..storage.keys import StorageKeys

logger = logging.getLogger(__name__)


class BackupService:
    """Whole-state backup and restore."""

    def __init__(self, ctx: StorageContext):
        self.ctx = ctx

    def _sections(self) -> Dict[str, CollectionRepository]:
        """Snapshot section name -> repository, in export order."""
        return {
            "users": self.ctx.users,
            "projects": self.ctx.projects,
            "tasks": self.ctx.tasks,
            "notes": self.ctx.notes,
            "appointments": self.ctx.appointments,
            "timeLogs": self.ctx.time_logs,
            "purchases": self.ctx.purchases,
            "schedule": self.ctx.schedule,
            "alerts": self.ctx.alerts,
        }

    async def export_data(self) -> Dict[str, List[Any]]:
        snapshot = {}
        for section, repo in self._sections().items():
            snapshot[section] = await repo.load_valid_raw()
        logger.info(
            "Exported snapshot: "
            + ", ".join(f"{k}={len(v)}" for k, v in snapshot.items())
        )
        return snapshot

    async def import_data(self, snapshot: Dict[str, Any]) -> Dict[str, int]:
        """
        Overwrite the collections present in the snapshot.

        Raises RecordValidationError, writing nothing, if any section is not
        a list or any record fails validation. Unknown sections are ignored.
        """
        if not isinstance(snapshot, dict):
            raise RecordValidationError("Snapshot must be a JSON object")

        validated = {}
        for section, repo in self._sections().items():
            items = snapshot.get(section)
            if items is None:
                continue
            if not isinstance(items, list):
                raise RecordValidationError(f"Snapshot section {section} must be a list")

            for index, item in enumerate(items):
                try:
                    repo.validate_item(item)
                except (ValidationError, TypeError) as e:
                    raise RecordValidationError(
                        f"Invalid record {index} in snapshot section {section}: {e}"
                    ) from e
            validated[section] = (repo, items)

        imported = {}
        for section, (repo, items) in validated.items():
            await repo.replace_raw(items)
            imported[section] = len(items)

        logger.info(f"Imported snapshot sections: {imported}")
        return imported

    async def clear_all_data(self) -> None:
        """Remove every stored key (session included) and all attachment files."""
        keys = StorageKeys.all() + [StorageKeys.quarantine(k) for k in StorageKeys.collections()]
        await self.ctx.store.remove_many(keys)
        await self.ctx.attachments.clear()
        logger.warning("All application data cleared")
