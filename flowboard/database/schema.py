from pathlib import Path

from flowboard.database.connection import get_connection

SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def apply_schema(path: Path | None = None) -> None:
    """Create the uploaded_files and workflow_logs tables if missing."""
    sql = (path or SCHEMA_PATH).read_text(encoding="utf-8")
    with get_connection() as conn:
        conn.execute(sql)
        conn.commit()
