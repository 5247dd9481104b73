"""
Tests for projectfy/services/backup.py
"""

import pytest
import pytest_asyncio

from projectfy.database.exceptions import RecordValidationError
from projectfy.models import Alert, Note, TimeLog
from projectfy.services.auth import SESSION_TOKEN, AuthService
from projectfy.services.backup import BackupService
from projectfy.storage import StorageKeys


SECTIONS = ["users", "projects", "tasks", "notes", "appointments", "timeLogs", "purchases", "schedule", "alerts"]


@pytest_asyncio.fixture
async def seeded(ctx, sample_user, sample_project, make_task):
    await ctx.users.save(sample_user)
    await ctx.projects.save(sample_project)
    await ctx.tasks.save(make_task("t1"))
    await ctx.notes.save(Note(id="n1", project_id="proj-1", user_id="user-1", title="Ideia"))
    await ctx.time_logs.save(TimeLog(
        id="l1", project_id="proj-1", user_id="user-1", start="2026-03-10T09:00:00.000Z", duration=60,
    ))
    await ctx.alerts.save(Alert(id="a1", user_id="user-1", message="hi"))
    return ctx


class TestExport:

    @pytest.mark.asyncio
    async def test_export_has_every_section(self, ctx):
        snapshot = await BackupService(ctx).export_data()

        assert list(snapshot) == SECTIONS
        assert all(v == [] for v in snapshot.values())

    @pytest.mark.asyncio
    async def test_export_returns_stored_arrays(self, seeded):
        snapshot = await BackupService(seeded).export_data()

        assert snapshot["tasks"] == await seeded.store.get(StorageKeys.TASKS)
        assert snapshot["timeLogs"][0]["projectId"] == "proj-1"
        assert snapshot["users"][0]["email"] == "ana@example.com"


class TestImport:

    @pytest.mark.asyncio
    async def test_round_trip_is_identity(self, seeded):
        service = BackupService(seeded)
        before = await service.export_data()

        await service.import_data(before)

        assert await service.export_data() == before

    @pytest.mark.asyncio
    async def test_round_trip_keeps_app_written_records(self, ctx):
        projects = [{"id": "p1", "name": "Obra", "userId": "u1", "status": "planning", "tasks": []}]
        tasks = [{"id": "t1", "title": "Pintar", "projectId": "p1", "userId": "u1", "dueDate": None}]
        await ctx.store.save(StorageKeys.PROJECTS, projects)
        await ctx.store.save(StorageKeys.TASKS, tasks)
        service = BackupService(ctx)
        before = await service.export_data()

        await service.import_data(before)

        assert await service.export_data() == before
        assert await ctx.store.get(StorageKeys.PROJECTS) == projects
        assert await ctx.store.get(StorageKeys.TASKS) == tasks

    @pytest.mark.asyncio
    async def test_round_trip_with_malformed_stored_record(self, ctx):
        good = {"id": "n2", "projectId": "p1", "userId": "u1", "title": "ok"}
        await ctx.store.save(StorageKeys.NOTES, [{"id": "n1", "title": "no parent"}, good])
        service = BackupService(ctx)

        snapshot = await service.export_data()
        imported = await service.import_data(snapshot)

        assert snapshot["notes"] == [good]
        assert imported["notes"] == 1
        assert await ctx.store.get(StorageKeys.NOTES) == [good]
        assert await ctx.store.get(StorageKeys.quarantine(StorageKeys.NOTES)) == [
            {"id": "n1", "title": "no parent"}
        ]

    @pytest.mark.asyncio
    async def test_snapshot_not_an_object(self, ctx):
        with pytest.raises(RecordValidationError):
            await BackupService(ctx).import_data([])

    @pytest.mark.asyncio
    async def test_only_provided_sections_overwritten(self, seeded):
        service = BackupService(seeded)

        imported = await service.import_data({"notes": []})

        assert imported == {"notes": 0}
        assert await seeded.notes.get_all() == []
        assert len(await seeded.tasks.get_all()) == 1

    @pytest.mark.asyncio
    async def test_unknown_sections_ignored(self, ctx):
        imported = await BackupService(ctx).import_data({"whatever": [1, 2]})

        assert imported == {}

    @pytest.mark.asyncio
    async def test_invalid_record_writes_nothing(self, seeded):
        service = BackupService(seeded)
        snapshot = {
            "notes": [],
            "tasks": [{"id": "bad", "title": "no project"}],
        }

        with pytest.raises(RecordValidationError, match="tasks"):
            await service.import_data(snapshot)

        assert len(await seeded.notes.get_all()) == 1
        assert len(await seeded.tasks.get_all()) == 1

    @pytest.mark.asyncio
    async def test_section_not_a_list(self, ctx):
        with pytest.raises(RecordValidationError):
            await BackupService(ctx).import_data({"users": {"id": "u1"}})

    @pytest.mark.asyncio
    async def test_non_object_record(self, ctx):
        with pytest.raises(RecordValidationError):
            await BackupService(ctx).import_data({"alerts": ["text"]})

    @pytest.mark.asyncio
    async def test_unknown_fields_survive_import(self, ctx):
        snapshot = {"notes": [{"id": "n1", "projectId": "p", "userId": "u", "color": "#ff0"}]}

        await BackupService(ctx).import_data(snapshot)

        assert (await ctx.store.get(StorageKeys.NOTES))[0]["color"] == "#ff0"


class TestClear:

    @pytest.mark.asyncio
    async def test_clear_removes_everything(self, seeded, attachments_dir):
        await AuthService(seeded).set_user_token(SESSION_TOKEN)
        attachments_dir.mkdir(parents=True)
        (attachments_dir / "id-9.pdf").write_bytes(b"x")
        await seeded.store.save(StorageKeys.quarantine(StorageKeys.TASKS), [{"junk": 1}])

        await BackupService(seeded).clear_all_data()

        assert await seeded.store.keys() == []
        assert not attachments_dir.exists()

    @pytest.mark.asyncio
    async def test_clear_without_attachments_dir(self, ctx):
        await BackupService(ctx).clear_all_data()

        assert await ctx.store.keys() == []
