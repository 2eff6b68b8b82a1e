from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from flowboard.parsing.models import ParsedPayload


class FileStatus(str, Enum):
    """Lifecycle of an uploaded file record: pending -> processed | failed."""

    PENDING = "pending"
    PROCESSED = "processed"
    FAILED = "failed"


class PipelineState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    PARSING = "parsing"
    SUBMITTING = "submitting"
    FORWARDING = "forwarding"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class UploadCandidate:
    """A file as handed over by the caller, before any processing."""

    raw_bytes: bytes
    declared_media_type: str
    declared_size: int
    original_name: str


@dataclass
class FileRecord:
    """Represents a row from the uploaded_files table."""

    id: str
    file_name: str
    storage_path: str
    media_type: str
    byte_size: int
    owner_id: str
    status: FileStatus
    parsed_payload: ParsedPayload | None = None
    external_response: dict[str, Any] | None = None
    created_at: datetime | None = None
    processed_at: datetime | None = None


@dataclass(frozen=True)
class ForwardResult:
    """Outcome of relaying a parsed upload to the automation endpoint."""

    delivered: bool = False
    skipped: bool = False
    warning: str | None = None
    response: dict[str, Any] | None = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.delivered or self.skipped


@dataclass(frozen=True)
class ProgressEvent:
    """One step of upload progress, emitted for UI consumption."""

    percent: int
    phase_label: str
    state: PipelineState
    record: FileRecord | None = None
    error: str | None = None
    warnings: tuple[str, ...] = field(default_factory=tuple)
