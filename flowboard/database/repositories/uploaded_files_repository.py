from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from flowboard.database.connection import get_connection
from flowboard.database.exceptions import (
    FileRecordNotFoundError,
    InvalidStatusTransitionError,
    RecordStoreError,
)
from flowboard.ingestion.models import FileRecord, FileStatus
from flowboard.parsing.models import ParsedPayload

_COLUMNS = """
    id, file_name, file_path, file_type, file_size, owner_id, status,
    parsed_data, external_response, created_at, processed_at
"""

_TERMINAL_STATUSES = frozenset({FileStatus.PROCESSED, FileStatus.FAILED})


@contextmanager
def _translate_errors(action: str) -> Generator[None, None, None]:
    try:
        yield
    except psycopg.Error as exc:
        raise RecordStoreError(f"Failed to {action}: {exc}") from exc


class UploadedFilesRepository:
    """Database operations for the uploaded_files table."""

    def insert(
        self,
        *,
        file_name: str,
        storage_path: str,
        media_type: str,
        byte_size: int,
        owner_id: str,
        parsed_payload: ParsedPayload,
    ) -> FileRecord:
        """Insert a pending file record and return it with its generated id.

        Raises:
            RecordStoreError: if the insert fails.
        """
        with _translate_errors(f"insert uploaded file {file_name}"):
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        INSERT INTO uploaded_files
                        (file_name, file_path, file_type, file_size, owner_id,
                         status, parsed_data)
                        VALUES (%s, %s, %s, %s, %s, %s, %s)
                        RETURNING {_COLUMNS}
                        """,
                        (
                            file_name,
                            storage_path,
                            media_type,
                            byte_size,
                            owner_id,
                            FileStatus.PENDING.value,
                            Jsonb(parsed_payload.to_dict()),
                        ),
                    )
                    row = cur.fetchone()
                conn.commit()

        if row is None:
            raise RecordStoreError(f"Insert of uploaded file {file_name} returned no row")
        return self._to_record(row)

    def update_status(
        self,
        file_id: str,
        status: FileStatus,
        external_response: dict[str, Any] | None = None,
    ) -> FileRecord:
        """Move a pending record to a terminal status and stamp processed_at.

        Raises:
            InvalidStatusTransitionError: if ``status`` is not terminal or the
                record already left the pending state.
            FileRecordNotFoundError: if no record with this ID exists.
        """
        if status not in _TERMINAL_STATUSES:
            raise InvalidStatusTransitionError(
                f"Cannot move file {file_id} to status '{status.value}'"
            )
        response_value = Jsonb(external_response) if external_response is not None else None
        with _translate_errors(f"update status of file {file_id}"):
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        UPDATE uploaded_files
                        SET status = %s,
                            external_response = %s,
                            processed_at = NOW(),
                            updated_at = NOW()
                        WHERE id = %s AND status = %s
                        RETURNING {_COLUMNS}
                        """,
                        (status.value, response_value, file_id, FileStatus.PENDING.value),
                    )
                    row = cur.fetchone()
                conn.commit()

        if row is None:
            current = self.find_by_id(file_id)
            raise InvalidStatusTransitionError(
                f"File {file_id} is already '{current.status.value}'"
            )
        return self._to_record(row)

    def find_by_id(self, file_id: str) -> FileRecord:
        """Find an uploaded file by ID.

        Raises:
            FileRecordNotFoundError: if no record with this ID exists.
        """
        with _translate_errors(f"load file {file_id}"):
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"SELECT {_COLUMNS} FROM uploaded_files WHERE id = %s",
                        (file_id,),
                    )
                    row = cur.fetchone()

        if row is None:
            raise FileRecordNotFoundError(f"File {file_id} not found")
        return self._to_record(row)

    def list_recent(self, limit: int = 10) -> list[FileRecord]:
        """Newest uploads first."""
        with _translate_errors("list recent uploaded files"):
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        f"""
                        SELECT {_COLUMNS}
                        FROM uploaded_files
                        ORDER BY created_at DESC
                        LIMIT %s
                        """,
                        (limit,),
                    )
                    rows = cur.fetchall()
        return [self._to_record(row) for row in rows]

    @staticmethod
    def _to_record(row: dict[str, Any]) -> FileRecord:
        parsed = row["parsed_data"]
        return FileRecord(
            id=str(row["id"]),
            file_name=row["file_name"],
            storage_path=row["file_path"],
            media_type=row["file_type"],
            byte_size=row["file_size"],
            owner_id=row["owner_id"],
            status=FileStatus(row["status"]),
            parsed_payload=ParsedPayload.from_dict(parsed) if parsed else None,
            external_response=row["external_response"],
            created_at=row["created_at"],
            processed_at=row["processed_at"],
        )
