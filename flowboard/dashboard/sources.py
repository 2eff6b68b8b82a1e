"""Live and mock data sources behind the dashboard.

Which variant is used is decided once at startup by DataSourceFactory; the
dashboard never falls back from live to mock data on its own.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import ClassVar
from urllib.parse import quote

import httpx

from flowboard.dashboard.exceptions import SheetSourceError
from flowboard.dashboard.models import SheetValues
from flowboard.database.models import WorkflowLogRecord
from flowboard.database.repositories.uploaded_files_repository import UploadedFilesRepository
from flowboard.database.repositories.workflow_logs_repository import WorkflowLogsRepository
from flowboard.ingestion.models import FileRecord


class BaseSheetSource(ABC):
    """Contract for spreadsheet readers."""

    @abstractmethod
    def get_values(self, sheet_id: str, range_: str) -> SheetValues:
        """Read a cell range.

        Raises:
            SheetSourceError: if the range cannot be read or is empty.
        """

    def close(self) -> None:
        """Release transport resources. The default holds none."""


class LiveSheetSource(BaseSheetSource):
    """Reads ranges through the Google Sheets v4 ``values.get`` REST call."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        timeout_seconds: float,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    def get_values(self, sheet_id: str, range_: str) -> SheetValues:
        url = f"/spreadsheets/{quote(sheet_id, safe='')}/values/{quote(range_, safe='')}"
        try:
            response = self._client.get(url, params={"key": self._api_key})
        except httpx.HTTPError as exc:
            raise SheetSourceError(f"Sheets request failed: {exc}") from exc

        if response.status_code == 404:
            raise SheetSourceError(f"Spreadsheet {sheet_id} not found")
        if not response.is_success:
            raise SheetSourceError(
                f"Sheets API returned HTTP {response.status_code}: {response.text[:200]}"
            )

        values = response.json().get("values") or []
        if not values:
            raise SheetSourceError(f"No data found in range {range_}")
        return SheetValues(
            headers=[str(cell) for cell in values[0]],
            rows=[[str(cell) for cell in row] for row in values[1:]],
            range_=range_,
            source="live",
        )

    def close(self) -> None:
        self._client.close()


class MockSheetSource(BaseSheetSource):
    """Fixed demo values for environments without spreadsheet credentials."""

    VALUES: ClassVar[list[list[str]]] = [
        ["ID", "Name", "Email", "Status", "Last Updated"],
        ["1", "John Doe", "john@example.com", "Active", "2024-01-15"],
        ["2", "Jane Smith", "jane@example.com", "Inactive", "2024-01-14"],
        ["3", "Bob Johnson", "bob@example.com", "Active", "2024-01-13"],
        ["4", "Alice Brown", "alice@example.com", "Pending", "2024-01-12"],
        ["5", "Charlie Wilson", "charlie@example.com", "Active", "2024-01-11"],
    ]

    def get_values(self, sheet_id: str, range_: str) -> SheetValues:
        _ = sheet_id
        return SheetValues(
            headers=list(self.VALUES[0]),
            rows=[list(row) for row in self.VALUES[1:]],
            range_=range_,
            source="mock",
        )


class BaseActivitySource(ABC):
    """Contract for workflow log and uploaded file listings."""

    @abstractmethod
    def recent_logs(self, limit: int) -> list[WorkflowLogRecord]:
        """Newest workflow log entries first."""

    @abstractmethod
    def recent_files(self, limit: int) -> list[FileRecord]:
        """Newest uploaded files first."""


class DatabaseActivitySource(BaseActivitySource):
    def __init__(
        self,
        files_repo: UploadedFilesRepository,
        logs_repo: WorkflowLogsRepository,
    ) -> None:
        self._files_repo = files_repo
        self._logs_repo = logs_repo

    def recent_logs(self, limit: int) -> list[WorkflowLogRecord]:
        return self._logs_repo.list_recent(limit)

    def recent_files(self, limit: int) -> list[FileRecord]:
        return self._files_repo.list_recent(limit)


class MockActivitySource(BaseActivitySource):
    """Canned workflow activity; there are never any uploaded files."""

    ENTRIES: ClassVar[list[tuple[str, str, int, str]]] = [
        ("Email Campaign", "Success", 45000, "Workflow execution completed"),
        ("Data Backup", "Error", 120000, "Database connection failed"),
        ("Payment Processing", "Success", 15000, "Payment processed successfully"),
        ("User Analytics", "Warning", 180000, "High memory usage detected"),
        ("Notification System", "Success", 30000, "Notifications sent to 1000 users"),
    ]

    def recent_logs(self, limit: int) -> list[WorkflowLogRecord]:
        now = datetime.now(timezone.utc)
        logs = [
            WorkflowLogRecord(
                id=index,
                workflow_name=name,
                status=status,
                execution_time_ms=execution_ms,
                message=message,
                created_at=now - timedelta(minutes=30 * index),
            )
            for index, (name, status, execution_ms, message) in enumerate(self.ENTRIES, start=1)
        ]
        return logs[:limit]

    def recent_files(self, limit: int) -> list[FileRecord]:
        _ = limit
        return []
