from dataclasses import dataclass, field
from datetime import datetime

from flowboard.database.models import WorkflowLogRecord
from flowboard.ingestion.models import FileRecord


@dataclass(frozen=True)
class SheetValues:
    """Values read from a spreadsheet range; the first row is the header."""

    headers: list[str]
    rows: list[list[str]]
    range_: str
    source: str

    @property
    def total_rows(self) -> int:
        return len(self.rows)

    def as_records(self) -> list[dict[str, str]]:
        """Rows keyed by header; short rows are padded with empty strings."""
        width = len(self.headers)
        return [
            dict(zip(self.headers, list(row[:width]) + [""] * (width - len(row))))
            for row in self.rows
        ]


@dataclass(frozen=True)
class DashboardStats:
    total_executions: int = 0
    successful_executions: int = 0
    success_rate: int = 0
    avg_execution_ms: int = 0
    sheet_row_count: int = 0


@dataclass(frozen=True)
class DashboardSnapshot:
    """Everything the dashboard renders for one refresh."""

    stats: DashboardStats
    generated_at: datetime
    recent_logs: list[WorkflowLogRecord] = field(default_factory=list)
    recent_files: list[FileRecord] = field(default_factory=list)
    sheet: SheetValues | None = None
