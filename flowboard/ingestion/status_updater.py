from typing import Any

from flowboard.database.exceptions import RecordStoreError
from flowboard.database.repositories.uploaded_files_repository import UploadedFilesRepository
from flowboard.database.repositories.workflow_logs_repository import WorkflowLogsRepository
from flowboard.ingestion.exceptions import StorageError
from flowboard.ingestion.models import FileRecord, FileStatus
from flowboard.logging.logger import Log

WORKFLOW_NAME = "File Upload Processing"


class StatusUpdater:
    """Flips a file record out of pending and records a workflow log entry."""

    def __init__(
        self,
        files_repo: UploadedFilesRepository,
        logs_repo: WorkflowLogsRepository,
    ) -> None:
        self._files_repo = files_repo
        self._logs_repo = logs_repo

    def mark_status(
        self,
        file_id: str,
        status: FileStatus,
        external_response: dict[str, Any] | None = None,
        elapsed_ms: int | None = None,
    ) -> FileRecord:
        """Set the terminal status of a file record.

        The workflow log entry is best-effort: failing to write it is logged
        and does not fail the status change.

        Raises:
            StorageError: if the status itself cannot be updated.
        """
        try:
            record = self._files_repo.update_status(file_id, status, external_response)
        except RecordStoreError as exc:
            raise StorageError(f"Failed to mark file {file_id} as {status.value}: {exc}") from exc
        Log.info(f"File {file_id} marked as {status.value}")

        self._log_workflow(record, elapsed_ms)
        return record

    def _log_workflow(self, record: FileRecord, elapsed_ms: int | None) -> None:
        succeeded = record.status == FileStatus.PROCESSED
        outcome = "successfully processed" if succeeded else "failed to process"
        try:
            self._logs_repo.insert(
                workflow_name=WORKFLOW_NAME,
                status="success" if succeeded else "failed",
                execution_time_ms=elapsed_ms,
                message=f'File "{record.file_name}" was {outcome}',
            )
        except RecordStoreError as exc:
            Log.warning(f"Could not write workflow log for file {record.id}: {exc}")
