from datetime import datetime, timezone

from flowboard.dashboard.exceptions import SheetSourceError
from flowboard.dashboard.models import DashboardSnapshot, DashboardStats, SheetValues
from flowboard.dashboard.sources import BaseActivitySource, BaseSheetSource
from flowboard.database.models import WorkflowLogRecord
from flowboard.logging.logger import Log


def compute_stats(logs: list[WorkflowLogRecord], sheet_row_count: int) -> DashboardStats:
    """Aggregate workflow log entries into dashboard counters.

    A log counts as successful when its status is "success" in any case.
    Missing execution times count as zero.
    """
    total = len(logs)
    if total == 0:
        return DashboardStats(sheet_row_count=sheet_row_count)

    successful = sum(1 for log in logs if log.status.lower() == "success")
    total_ms = sum(log.execution_time_ms or 0 for log in logs)
    return DashboardStats(
        total_executions=total,
        successful_executions=successful,
        success_rate=round(100 * successful / total),
        avg_execution_ms=round(total_ms / total),
        sheet_row_count=sheet_row_count,
    )


class DashboardService:
    """Builds dashboard snapshots from a sheet source and an activity source."""

    def __init__(
        self,
        sheet_source: BaseSheetSource,
        activity_source: BaseActivitySource,
        *,
        sheet_id: str,
        sheet_range: str,
        files_limit: int = 10,
        logs_limit: int = 50,
    ) -> None:
        self._sheet_source = sheet_source
        self._activity_source = activity_source
        self._sheet_id = sheet_id
        self._sheet_range = sheet_range
        self._files_limit = files_limit
        self._logs_limit = logs_limit

    def snapshot(self) -> DashboardSnapshot:
        """Collect one refresh worth of data.

        Sheet failures degrade to an empty sheet. Activity store failures
        propagate as RecordStoreError.
        """
        sheet = self._read_sheet()
        logs = self._activity_source.recent_logs(self._logs_limit)
        files = self._activity_source.recent_files(self._files_limit)
        stats = compute_stats(logs, sheet.total_rows if sheet is not None else 0)
        return DashboardSnapshot(
            stats=stats,
            generated_at=datetime.now(timezone.utc),
            recent_logs=logs,
            recent_files=files,
            sheet=sheet,
        )

    def close(self) -> None:
        self._sheet_source.close()

    def _read_sheet(self) -> SheetValues | None:
        try:
            return self._sheet_source.get_values(self._sheet_id, self._sheet_range)
        except SheetSourceError as exc:
            Log.warning(f"Sheet data unavailable: {exc}")
            return None


def render_snapshot(snapshot: DashboardSnapshot) -> str:
    """Plain-text rendering used by the CLI."""
    stats = snapshot.stats
    lines = [
        f"Dashboard at {snapshot.generated_at.isoformat()}",
        f"  sheet rows:      {stats.sheet_row_count}",
        f"  executions:      {stats.total_executions}",
        f"  success rate:    {stats.success_rate}%",
        f"  avg execution:   {stats.avg_execution_ms} ms",
        "Recent workflow runs:",
    ]
    for log in snapshot.recent_logs:
        line = f"  [{log.status}] {log.workflow_name} ({log.execution_time_ms or 0} ms)"
        if log.message:
            line = f"{line} {log.message}"
        lines.append(line)
    lines.append("Recent files:")
    for record in snapshot.recent_files:
        lines.append(f"  {record.file_name} {record.status.value} {record.byte_size} bytes")
    return "\n".join(lines)
