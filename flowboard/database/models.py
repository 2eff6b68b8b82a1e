from dataclasses import dataclass
from datetime import datetime


@dataclass
class WorkflowLogRecord:
    """Represents a row from the workflow_logs table."""

    id: int
    workflow_name: str
    status: str
    execution_time_ms: int | None = None
    message: str | None = None
    created_at: datetime | None = None
