"""
Referential consistency checker.

Only project deletion cascades. Deleting a user leaves the user's
projects, tasks and other records in place, and records can also be
orphaned by partial imports. This checker finds child records whose parent
no longer exists; it reports, it never deletes.
"""

import logging
from typing import Dict, List

from ..context import StorageContext

logger = logging.getLogger(__name__)


class IntegrityChecker:
    """Find records pointing at missing projects or users."""

    def __init__(self, ctx: StorageContext):
        self.ctx = ctx

    async def find_orphans(self) -> Dict[str, List[str]]:
        """
        Ids of orphaned records, keyed by "<collection>.<missing parent>".

        Optional parent links (appointment/alert projectId) only count when
        they are set.
        """
        logger.info("Starting orphan check...")

        user_ids = {u.id for u in await self.ctx.users.get_all()}
        projects = await self.ctx.projects.get_all()
        project_ids = {p.id for p in projects}

        tasks = await self.ctx.tasks.get_all()
        notes = await self.ctx.notes.get_all()
        appointments = await self.ctx.appointments.get_all()
        logs = await self.ctx.time_logs.get_all()
        purchases = await self.ctx.purchases.get_all()
        alerts = await self.ctx.alerts.get_all()
        events = await self.ctx.schedule.get_all()

        issues = {
            "projects.user": [p.id for p in projects if p.user_id not in user_ids],
            "tasks.project": [t.id for t in tasks if t.project_id not in project_ids],
            "tasks.user": [t.id for t in tasks if t.user_id not in user_ids],
            "notes.project": [n.id for n in notes if n.project_id not in project_ids],
            "appointments.user": [a.id for a in appointments if a.user_id not in user_ids],
            "appointments.project": [
                a.id for a in appointments if a.project_id and a.project_id not in project_ids
            ],
            "time_logs.project": [log.id for log in logs if log.project_id not in project_ids],
            "purchases.project": [p.id for p in purchases if p.project_id not in project_ids],
            "alerts.user": [a.id for a in alerts if a.user_id not in user_ids],
            "alerts.project": [
                a.id for a in alerts if a.project_id and a.project_id not in project_ids
            ],
            "schedule.user": [e.id for e in events if e.user_id not in user_ids],
        }

        issues = {k: v for k, v in issues.items() if v}
        total = sum(len(v) for v in issues.values())
        logger.info(f"Orphan check complete. Found {total} orphaned records.")
        return issues
