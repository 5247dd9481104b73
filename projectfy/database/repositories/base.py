"""
Generic collection repository.

Every entity collection is persisted the same way: one JSON array under
one fixed key. A repository loads the whole array, works on it in memory
and writes the whole array back. Collections stay small (one user, one
device), so there is no indexing and no pagination.

Mutations hold the store's per-key lock for the full read-modify-write
cycle. Records that fail shape validation are skipped on read and moved to
a quarantine key the next time the collection is written.
"""

import logging
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from ...models.base import Record
from ...storage.keys import StorageKeys
from ...storage.kv_store import KeyValueStore
from ...utils.datetime_utils import Clock, now_iso
from ...utils.ids import IdFactory, new_id

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Record)


class CollectionRepository(Generic[T]):
    """CRUD over one JSON-array collection."""

    key: str = ""
    model: Type[T] = Record
    parent_field: Optional[str] = None

    def __init__(
        self,
        store: KeyValueStore,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        self.store = store
        self.clock = clock
        self.id_factory = id_factory or new_id

    # ==================== RAW ACCESS ====================

    async def load_raw(self) -> List[Any]:
        """Stored array as-is, or [] when absent or not an array."""
        data = await self.store.get(self.key, [])
        if not isinstance(data, list):
            logger.error(f"Collection {self.key} is not a JSON array, treating as empty")
            return []
        return data

    async def write_raw(self, items: List[Dict[str, Any]]) -> None:
        await self.store.save(self.key, items)

    def validate_item(self, item: Any) -> T:
        """Parse one stored item. Raises ValidationError or TypeError."""
        if not isinstance(item, dict):
            raise TypeError(f"expected object, got {type(item).__name__}")
        return self.model.from_json(item)

    def _parse(self, items: List[Any]) -> Tuple[List[T], List[Any]]:
        """Split stored items into valid records and malformed leftovers."""
        records: List[T] = []
        bad: List[Any] = []
        for item in items:
            try:
                records.append(self.validate_item(item))
            except (ValidationError, TypeError) as e:
                logger.warning(f"Skipping malformed record in {self.key}: {e}")
                bad.append(item)
        return records, bad

    async def _quarantine(self, bad: List[Any]) -> None:
        if not bad:
            return
        qkey = StorageKeys.quarantine(self.key)
        existing = await self.store.get(qkey, [])
        if not isinstance(existing, list):
            existing = []
        new = [item for item in bad if item not in existing]
        if new:
            await self.store.save(qkey, existing + new)
            logger.warning(f"Quarantined {len(new)} malformed records from {self.key}")

    async def _load_for_write(self) -> Tuple[List[T], List[Any]]:
        return self._parse(await self.load_raw())

    async def _write(self, records: List[T], bad: Optional[List[Any]] = None) -> None:
        """Write the cleaned collection, moving malformed items aside first."""
        if bad:
            await self._quarantine(bad)
        await self.write_raw([r.to_json() for r in records])

    @staticmethod
    def _field_alias(field: str) -> str:
        return to_camel(field)

    def _now(self) -> str:
        return now_iso(self.clock)

    # ==================== READS ====================

    async def get_all(self) -> List[T]:
        """Every valid record in the collection."""
        records, _ = self._parse(await self.load_raw())
        return records

    async def get_by_id(self, entity_id: str) -> Optional[T]:
        for record in await self.get_all():
            if record.id == entity_id:
                return record
        return None

    async def get_by_parent(self, parent_id: str, field: Optional[str] = None) -> List[T]:
        """Records whose parent field (default: the repository's) equals parent_id."""
        field = field or self.parent_field
        if not field:
            raise ValueError(f"{type(self).__name__} has no parent field")
        return [r for r in await self.get_all() if getattr(r, field, None) == parent_id]

    async def filter(self, predicate: Callable[[T], bool]) -> List[T]:
        return [r for r in await self.get_all() if predicate(r)]

    async def count(self) -> int:
        return len(await self.get_all())

    # ==================== WRITES ====================

    def prepare(self, entity: T, existing: Optional[T], now: str) -> T:
        """Stamp ids and timestamps before a record is written."""
        updates: Dict[str, Any] = {"updated_at": now}
        if not entity.id:
            updates["id"] = self.id_factory()
        if not entity.created_at:
            updates["created_at"] = existing.created_at if existing and existing.created_at else now
        return entity.model_copy(update=updates)

    async def save(self, entity: T) -> T:
        """
        Upsert by id.

        Replaces the stored record in place when the id exists, otherwise
        appends (generating an id if the entity has none). Returns the
        record as written.
        """
        async with self.store.lock(self.key):
            records, bad = await self._load_for_write()
            now = self._now()

            index = next(
                (i for i, r in enumerate(records) if entity.id and r.id == entity.id),
                None,
            )
            existing = records[index] if index is not None else None
            to_save = self.prepare(entity, existing, now)

            if index is not None:
                records[index] = to_save
            else:
                records.append(to_save)

            await self._write(records, bad)
            logger.debug(f"Saved {self.key} record {to_save.id}")
            return to_save

    async def update(self, entity_id: str, mutator: Callable[[T], Optional[T]]) -> Optional[T]:
        """
        Locked read-modify-write of a single record.

        The mutator receives the current record and returns the new one
        (or None to leave it unchanged). Returns the written record, or
        None when the id does not exist.
        """
        async with self.store.lock(self.key):
            records, bad = await self._load_for_write()
            for i, record in enumerate(records):
                if record.id != entity_id:
                    continue
                changed = mutator(record)
                if changed is None:
                    return record
                changed = changed.model_copy(update={"updated_at": self._now()})
                records[i] = changed
                await self._write(records, bad)
                return changed
            return None

    async def delete_where(self, predicate: Callable[[Dict[str, Any]], bool]) -> int:
        """Remove every stored item matching predicate. Returns how many went."""
        async with self.store.lock(self.key):
            items = await self.load_raw()
            kept = [item for item in items if not (isinstance(item, dict) and predicate(item))]
            removed = len(items) - len(kept)
            if removed:
                await self.write_raw(kept)
            return removed

    async def delete(self, entity_id: str) -> bool:
        """Delete by id. Deleting an unknown id is a no-op."""
        removed = await self.delete_where(lambda item: item.get("id") == entity_id)
        if removed:
            logger.info(f"Deleted {self.key} record {entity_id}")
        return removed > 0

    async def delete_by_parent(self, parent_id: str, field: Optional[str] = None) -> int:
        field = field or self.parent_field
        if not field:
            raise ValueError(f"{type(self).__name__} has no parent field")
        alias = self._field_alias(field)
        removed = await self.delete_where(lambda item: item.get(alias) == parent_id)
        if removed:
            logger.info(f"Deleted {removed} {self.key} records with {alias}={parent_id}")
        return removed

    async def load_valid_raw(self) -> List[Dict[str, Any]]:
        """Stored items that pass validation, exactly as stored."""
        items = await self.load_raw()
        valid = []
        for item in items:
            try:
                self.validate_item(item)
            except (ValidationError, TypeError):
                continue
            valid.append(item)
        if len(valid) != len(items):
            logger.warning(f"Left {len(items) - len(valid)} malformed records of {self.key} out")
        return valid

    async def replace_raw(self, items: List[Dict[str, Any]]) -> None:
        """
        Overwrite the whole collection with already validated items.

        Malformed items currently stored are quarantined, not discarded.
        """
        async with self.store.lock(self.key):
            _, bad = await self._load_for_write()
            await self._quarantine(bad)
            await self.write_raw(items)
