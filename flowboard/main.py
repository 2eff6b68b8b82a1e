import argparse
import sys
from pathlib import Path

from flowboard.config.settings import Settings
from flowboard.dashboard.factory import DataSourceFactory
from flowboard.dashboard.scheduler import PeriodicTask
from flowboard.dashboard.service import DashboardService, render_snapshot
from flowboard.database.connection import close_pool, init_pool
from flowboard.database.schema import apply_schema
from flowboard.ingestion.exceptions import IngestionError
from flowboard.ingestion.models import ProgressEvent
from flowboard.ingestion.orchestrator import build_orchestrator
from flowboard.logging.logger import Log
from flowboard.parsing.media_types import guess_media_type


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flowboard", description="Upload ingestion and dashboard")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("setup", help="Create database tables")

    upload = commands.add_parser("upload", help="Run a file through the ingestion pipeline")
    upload.add_argument("path", type=Path)
    upload.add_argument("--owner", default="local-user", help="Owner id stored with the file")
    upload.add_argument(
        "--media-type",
        default=None,
        help="Declared media type (guessed from the extension when omitted)",
    )

    dashboard = commands.add_parser("dashboard", help="Print dashboard snapshots")
    dashboard.add_argument("--once", action="store_true", help="Print a single snapshot and exit")
    return parser


def run_upload(settings: Settings, path: Path, owner_id: str, media_type: str | None) -> int:
    raw_bytes = path.read_bytes()
    declared = media_type or guess_media_type(path.name)

    def report(event: ProgressEvent) -> None:
        print(f"[{event.percent:3d}%] {event.phase_label}")
        if event.error:
            print(f"  error: {event.error}")
        for warning in event.warnings:
            print(f"  warning: {warning}")

    with build_orchestrator(settings) as orchestrator:
        try:
            record = orchestrator.process(
                raw_bytes,
                declared,
                len(raw_bytes),
                path.name,
                owner_id,
                on_progress=report,
            )
        except IngestionError as exc:
            Log.error(f"Upload rejected: {exc}")
            return 1

    print(f"File {record.id} stored at {record.storage_path} with status {record.status.value}")
    return 0


def run_dashboard(settings: Settings, once: bool) -> int:
    service = DashboardService(
        DataSourceFactory.create_sheet_source(settings),
        DataSourceFactory.create_activity_source(settings),
        sheet_id=settings.sheets_sheet_id,
        sheet_range=settings.sheets_range,
        files_limit=settings.recent_files_limit,
        logs_limit=settings.recent_logs_limit,
    )

    def refresh() -> None:
        print(render_snapshot(service.snapshot()), flush=True)

    task = PeriodicTask(settings.dashboard_refresh_seconds, refresh, name="dashboard-refresh")
    try:
        task.run(max_runs=1 if once else None)
    except KeyboardInterrupt:
        Log.info("Dashboard shutting down gracefully")
    finally:
        task.cancel()
        service.close()
    return 0


def needs_database(command: str, settings: Settings) -> bool:
    """The mock dashboard is the only command that runs without PostgreSQL."""
    return not (command == "dashboard" and settings.data_source.lower() == "mock")


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse args -> initialize pool when needed -> run the command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    use_database = needs_database(args.command, settings)
    if use_database:
        init_pool(settings)
    try:
        if args.command == "setup":
            apply_schema()
            Log.info("Database schema applied")
            return 0
        if args.command == "upload":
            return run_upload(settings, args.path, args.owner, args.media_type)
        return run_dashboard(settings, args.once)
    finally:
        if use_database:
            close_pool()


if __name__ == "__main__":
    sys.exit(main())
