"""
Alert creation and the overdue-deadline scan.

Every alert is stored in the alerts collection and mirrored as a local
notification through an injected notifier. The default notifier only
logs; the mobile shell plugs its own in.

check_deadlines() runs on every dashboard refresh. With
settings.dedupe_deadline_alerts on, a project gets at most one deadline
alert per calendar day (in settings.timezone); with it off every scan
creates a fresh alert for every overdue project.
"""

import logging
from typing import Awaitable, Callable, List, Optional

from config import settings
from ..context import StorageContext
from ..models.alert import Alert, AlertType
from ..models.project import Project
from ..utils.datetime_utils import is_overdue, local_date, now_iso, parse_timestamp
from .auth import AuthService

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], Awaitable[None]]


async def log_notifier(title: str, body: str) -> None:
    """Default notifier: no device, just a log line."""
    logger.info(f"Local notification: {title} - {body}")


class NotificationService:
    """Creates alerts for projects, tasks and the system."""

    def __init__(
        self,
        ctx: StorageContext,
        notifier: Optional[Notifier] = None,
        dedupe: Optional[bool] = None,
    ):
        self.ctx = ctx
        self.notifier = notifier or log_notifier
        self.dedupe = settings.dedupe_deadline_alerts if dedupe is None else dedupe
        self.auth = AuthService(ctx)

    async def _resolve_user_id(self, user_id: Optional[str]) -> Optional[str]:
        if user_id:
            return user_id
        user = await self.auth.get_current_user()
        return user.id if user else None

    async def _notify(self, title: str, body: str) -> None:
        try:
            await self.notifier(title, body)
        except Exception as e:
            logger.error(f"Failed to deliver local notification '{title}': {e}")

    async def _create(self, alert: Alert, title: str) -> Alert:
        saved = await self.ctx.alerts.save(alert)
        await self._notify(title, alert.message)
        return saved

    async def create_project_alert(
        self,
        project_id: str,
        project_name: str,
        kind: str = "deadline",
        user_id: Optional[str] = None,
    ) -> Optional[Alert]:
        """Deadline (warning) or status-change (info) alert for a project."""
        user_id = await self._resolve_user_id(user_id)
        if not user_id:
            return None

        if kind == "deadline":
            message = f'The deadline for project "{project_name}" is due!'
            title, alert_type = "Project Deadline", AlertType.WARNING
        else:
            message = f'The status of project "{project_name}" was updated.'
            title, alert_type = "Project Update", AlertType.INFO

        alert = Alert(
            id=self.ctx.id_factory(),
            user_id=user_id,
            project_id=project_id,
            message=message,
            type=alert_type,
            category="deadline" if kind == "deadline" else "status",
            created_at=now_iso(self.ctx.clock),
        )
        return await self._create(alert, title)

    async def create_task_alert(
        self,
        task_id: str,
        task_title: str,
        project_name: str,
        user_id: Optional[str] = None,
    ) -> Optional[Alert]:
        user_id = await self._resolve_user_id(user_id)
        if not user_id:
            return None

        alert = Alert(
            id=self.ctx.id_factory(),
            user_id=user_id,
            task_id=task_id,
            message=f'New task assigned: "{task_title}" in project "{project_name}"',
            type=AlertType.INFO,
            category="task",
            created_at=now_iso(self.ctx.clock),
        )
        return await self._create(alert, "New Task")

    async def create_system_alert(
        self,
        message: str,
        alert_type: AlertType = AlertType.INFO,
        user_id: Optional[str] = None,
    ) -> Optional[Alert]:
        user_id = await self._resolve_user_id(user_id)
        if not user_id:
            return None

        alert = Alert(
            id=self.ctx.id_factory(),
            user_id=user_id,
            message=message,
            type=alert_type,
            category="system",
            created_at=now_iso(self.ctx.clock),
        )
        return await self._create(alert, "System")

    async def _alerted_today(self, user_id: str, project: Project) -> bool:
        today = local_date(self.ctx.now())
        for alert in await self.ctx.alerts.get_user_alerts(user_id):
            if alert.project_id != project.id or alert.category != "deadline":
                continue
            created = parse_timestamp(alert.created_at)
            if created and local_date(created) == today:
                return True
        return False

    async def check_deadlines(self, user_id: Optional[str] = None) -> List[Alert]:
        """
        Create a deadline alert for each of the user's overdue projects.

        A project is overdue when its deadline is strictly before now.
        Returns the alerts created by this scan.
        """
        user_id = await self._resolve_user_id(user_id)
        if not user_id:
            return []

        now = self.ctx.now()
        created: List[Alert] = []
        for project in await self.ctx.projects.get_user_projects(user_id):
            if not is_overdue(project.deadline, now):
                continue
            if self.dedupe and await self._alerted_today(user_id, project):
                logger.debug(f"Deadline alert for {project.id} already raised today")
                continue

            alert = await self.create_project_alert(project.id, project.name, "deadline", user_id)
            if alert:
                created.append(alert)

        if created:
            logger.info(f"Deadline scan for {user_id} raised {len(created)} alerts")
        return created
