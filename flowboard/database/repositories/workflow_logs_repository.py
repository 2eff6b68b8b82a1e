from typing import Any

import psycopg
from psycopg.rows import dict_row

from flowboard.database.connection import get_connection
from flowboard.database.exceptions import RecordStoreError
from flowboard.database.models import WorkflowLogRecord


class WorkflowLogsRepository:
    """Database operations for the workflow_logs table."""

    def insert(
        self,
        workflow_name: str,
        status: str,
        execution_time_ms: int | None,
        message: str,
    ) -> WorkflowLogRecord:
        """Append one workflow execution entry.

        Raises:
            RecordStoreError: if the insert fails.
        """
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        """
                        INSERT INTO workflow_logs
                        (workflow_name, status, execution_time, message)
                        VALUES (%s, %s, %s, %s)
                        RETURNING id, workflow_name, status, execution_time,
                                  message, created_at
                        """,
                        (workflow_name, status, execution_time_ms, message),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as exc:
            raise RecordStoreError(f"Failed to write workflow log: {exc}") from exc

        if row is None:
            raise RecordStoreError("Insert into workflow_logs returned no row")
        return self._to_record(row)

    def list_recent(self, limit: int = 50) -> list[WorkflowLogRecord]:
        """Newest entries first."""
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        """
                        SELECT id, workflow_name, status, execution_time,
                               message, created_at
                        FROM workflow_logs
                        ORDER BY created_at DESC
                        LIMIT %s
                        """,
                        (limit,),
                    )
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise RecordStoreError(f"Failed to list workflow logs: {exc}") from exc
        return [self._to_record(row) for row in rows]

    @staticmethod
    def _to_record(row: dict[str, Any]) -> WorkflowLogRecord:
        return WorkflowLogRecord(
            id=row["id"],
            workflow_name=row["workflow_name"],
            status=row["status"],
            execution_time_ms=row["execution_time"],
            message=row["message"],
            created_at=row["created_at"],
        )
