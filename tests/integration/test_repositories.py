from typing import Any

import psycopg
import pytest

from flowboard.database.exceptions import FileRecordNotFoundError, InvalidStatusTransitionError
from flowboard.database.repositories.uploaded_files_repository import UploadedFilesRepository
from flowboard.database.repositories.workflow_logs_repository import WorkflowLogsRepository
from flowboard.ingestion.models import FileStatus
from flowboard.parsing.models import ParsedPayload, PayloadKind

_PAYLOAD = ParsedPayload(
    kind=PayloadKind.TABULAR_CSV,
    rows=({"id": "1", "name": "Alice"}, {"id": "2", "name": "Bob"}),
)


def _insert(repo: UploadedFilesRepository, cleanup: list[tuple[str, Any]]):
    record = repo.insert(
        file_name="people.csv",
        storage_path="uploads/20240115103000000000_abcd1234_people.csv",
        media_type="text/csv",
        byte_size=27,
        owner_id="integration-user",
        parsed_payload=_PAYLOAD,
    )
    cleanup.append(("uploaded_files", record.id))
    return record


class TestUploadedFilesRepository:
    def test_insert_assigns_id_and_pending_status(
        self, integration_cleanup: list[tuple[str, Any]]
    ) -> None:
        repo = UploadedFilesRepository()

        record = _insert(repo, integration_cleanup)

        assert record.id
        assert record.status == FileStatus.PENDING
        assert record.created_at is not None
        assert record.processed_at is None
        assert repo.find_by_id(record.id).parsed_payload == _PAYLOAD

    def test_single_transition_out_of_pending(
        self, integration_cleanup: list[tuple[str, Any]]
    ) -> None:
        repo = UploadedFilesRepository()
        record = _insert(repo, integration_cleanup)

        updated = repo.update_status(record.id, FileStatus.PROCESSED, {"accepted": True})

        assert updated.status == FileStatus.PROCESSED
        assert updated.external_response == {"accepted": True}
        assert updated.processed_at is not None
        with pytest.raises(InvalidStatusTransitionError, match="already 'processed'"):
            repo.update_status(record.id, FileStatus.FAILED)

    def test_unknown_id_raises_not_found(self, integration_pool: None) -> None:
        with pytest.raises(FileRecordNotFoundError):
            UploadedFilesRepository().find_by_id("00000000-0000-0000-0000-000000000000")

    def test_status_check_constraint(self, db_conn: psycopg.Connection[Any]) -> None:
        with pytest.raises(psycopg.errors.CheckViolation):
            db_conn.execute(
                """
                INSERT INTO uploaded_files
                (file_name, file_path, file_type, file_size, owner_id, status)
                VALUES ('x', 'x', 'text/csv', 1, 'u', 'archived')
                """
            )
        db_conn.rollback()

    def test_list_recent_includes_new_upload(
        self, integration_cleanup: list[tuple[str, Any]]
    ) -> None:
        repo = UploadedFilesRepository()
        record = _insert(repo, integration_cleanup)

        recent = repo.list_recent(50)

        assert record.id in [r.id for r in recent]


class TestWorkflowLogsRepository:
    def test_insert_and_list(self, integration_cleanup: list[tuple[str, Any]]) -> None:
        repo = WorkflowLogsRepository()

        entry = repo.insert("File Upload Processing", "success", 42, "integration run")
        integration_cleanup.append(("workflow_logs", entry.id))

        assert entry.execution_time_ms == 42
        assert entry.id in [log.id for log in repo.list_recent(50)]
