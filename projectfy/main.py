"""
ProjectFy - operator command line.

Backup, restore and inspection of the on-device store without the app:

    projectfy export --output backup.json
    projectfy import backup.json
    projectfy clear --yes
    projectfy report <user_id>
    projectfy stats <user_id>
    projectfy orphans
    projectfy check-deadlines <user_id>
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from config import settings
from .context import StorageContext, close_context, get_context
from .database.exceptions import StorageError
from .services import (
    BackupService,
    DashboardService,
    IntegrityChecker,
    NotificationService,
    ReportService,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="projectfy", description=f"{settings.app_name} storage tools")
    sub = parser.add_subparsers(dest="command", required=True)

    export = sub.add_parser("export", help="Write a JSON snapshot of every collection")
    export.add_argument("--output", "-o", help="File to write (default: stdout)")

    imp = sub.add_parser("import", help="Restore collections from a JSON snapshot")
    imp.add_argument("file")

    clear = sub.add_parser("clear", help="Delete all data and attachments")
    clear.add_argument("--yes", action="store_true", help="Confirm the wipe")

    report = sub.add_parser("report", help="Hours, completion and status report for a user")
    report.add_argument("user_id")

    stats = sub.add_parser("stats", help="Dashboard statistics for a user")
    stats.add_argument("user_id")

    sub.add_parser("orphans", help="List records whose parent no longer exists")

    deadlines = sub.add_parser("check-deadlines", help="Raise alerts for overdue projects")
    deadlines.add_argument("user_id")

    return parser


def _dump(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


async def run(args: argparse.Namespace, ctx: StorageContext) -> int:
    if args.command == "export":
        snapshot = await BackupService(ctx).export_data()
        if args.output:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(_dump(snapshot))
            print(f"[SUCCESS] Snapshot written to {args.output}")
        else:
            print(_dump(snapshot))
        return 0

    if args.command == "import":
        try:
            with open(args.file, "r", encoding="utf-8") as f:
                snapshot = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Cannot read snapshot {args.file}: {e}")
            print(f"[ERROR] Cannot read {args.file}: {e}")
            return 1
        imported = await BackupService(ctx).import_data(snapshot)
        print(f"[SUCCESS] Imported: {imported}")
        return 0

    if args.command == "clear":
        if not args.yes:
            print("[ERROR] Refusing to wipe data without --yes")
            return 1
        await BackupService(ctx).clear_all_data()
        print("[SUCCESS] All data cleared")
        return 0

    if args.command == "report":
        report = await ReportService(ctx).build_report(args.user_id)
        print(_dump(report.model_dump(mode="json")))
        return 0

    if args.command == "stats":
        stats = await DashboardService(ctx).get_statistics(args.user_id)
        print(_dump(stats.model_dump(mode="json")))
        return 0

    if args.command == "orphans":
        issues = await IntegrityChecker(ctx).find_orphans()
        print(_dump(issues))
        return 1 if issues else 0

    if args.command == "check-deadlines":
        alerts = await NotificationService(ctx).check_deadlines(args.user_id)
        print(f"Raised {len(alerts)} deadline alerts")
        return 0

    return 2


async def _main(argv: Optional[List[str]]) -> int:
    args = build_parser().parse_args(argv)
    ctx = get_context()
    try:
        return await run(args, ctx)
    except StorageError as e:
        logger.error(f"Storage error: {e}")
        print(f"[ERROR] {e}")
        return 1
    finally:
        await close_context()


def main(argv: Optional[List[str]] = None) -> None:
    sys.exit(asyncio.run(_main(argv)))


if __name__ == "__main__":
    main()
