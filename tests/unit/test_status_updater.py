from unittest.mock import MagicMock

import pytest

from flowboard.database.exceptions import InvalidStatusTransitionError, RecordStoreError
from flowboard.database.repositories.uploaded_files_repository import UploadedFilesRepository
from flowboard.database.repositories.workflow_logs_repository import WorkflowLogsRepository
from flowboard.ingestion.exceptions import StorageError
from flowboard.ingestion.models import FileRecord, FileStatus
from flowboard.ingestion.status_updater import WORKFLOW_NAME, StatusUpdater


def _record(status: FileStatus) -> FileRecord:
    return FileRecord(
        id="file-1",
        file_name="people.csv",
        storage_path="uploads/x_people.csv",
        media_type="text/csv",
        byte_size=10,
        owner_id="user-1",
        status=status,
    )


def _make_updater() -> tuple[StatusUpdater, MagicMock, MagicMock]:
    files_repo = MagicMock(spec=UploadedFilesRepository)
    logs_repo = MagicMock(spec=WorkflowLogsRepository)
    return StatusUpdater(files_repo, logs_repo), files_repo, logs_repo


class TestMarkStatus:
    def test_updates_record_and_logs_success(self) -> None:
        updater, files_repo, logs_repo = _make_updater()
        files_repo.update_status.return_value = _record(FileStatus.PROCESSED)

        record = updater.mark_status("file-1", FileStatus.PROCESSED, {"ok": True}, elapsed_ms=42)

        assert record.status == FileStatus.PROCESSED
        files_repo.update_status.assert_called_once_with(
            "file-1", FileStatus.PROCESSED, {"ok": True}
        )
        logs_repo.insert.assert_called_once_with(
            workflow_name=WORKFLOW_NAME,
            status="success",
            execution_time_ms=42,
            message='File "people.csv" was successfully processed',
        )

    def test_logs_failed_status(self) -> None:
        updater, files_repo, logs_repo = _make_updater()
        files_repo.update_status.return_value = _record(FileStatus.FAILED)

        updater.mark_status("file-1", FileStatus.FAILED)

        kwargs = logs_repo.insert.call_args.kwargs
        assert kwargs["status"] == "failed"
        assert kwargs["message"] == 'File "people.csv" failed to process'

    def test_update_failure_raises_storage_error(self) -> None:
        updater, files_repo, logs_repo = _make_updater()
        files_repo.update_status.side_effect = RecordStoreError("db down")

        with pytest.raises(StorageError, match="Failed to mark file file-1 as processed"):
            updater.mark_status("file-1", FileStatus.PROCESSED)

        logs_repo.insert.assert_not_called()

    def test_repeated_transition_raises_storage_error(self) -> None:
        updater, files_repo, _logs = _make_updater()
        files_repo.update_status.side_effect = InvalidStatusTransitionError("already 'processed'")

        with pytest.raises(StorageError, match="already 'processed'"):
            updater.mark_status("file-1", FileStatus.FAILED)

    def test_workflow_log_failure_does_not_fail_update(self) -> None:
        updater, files_repo, logs_repo = _make_updater()
        files_repo.update_status.return_value = _record(FileStatus.PROCESSED)
        logs_repo.insert.side_effect = RecordStoreError("logs table missing")

        record = updater.mark_status("file-1", FileStatus.PROCESSED)

        assert record.status == FileStatus.PROCESSED
