import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

from flowboard.ingestion.models import (
    FileRecord,
    ForwardResult,
    PipelineState,
    UploadCandidate,
)
from flowboard.parsing.models import ParsedPayload


@dataclass(slots=True)
class PipelineContext:
    candidate: UploadCandidate
    owner_id: str
    started_at: float = field(default_factory=time.monotonic)
    payload: ParsedPayload | None = None
    record: FileRecord | None = None
    forward_result: ForwardResult | None = None
    warnings: list[str] = field(default_factory=list)
    error_message: str = ""

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.started_at) * 1000)


class PipelineStep(ABC):
    """One stage of the upload pipeline.

    ``state``, ``percent`` and ``label`` describe the progress event emitted
    when the step starts. A failing fatal step stops the pipeline; a failing
    non-fatal step is logged and the pipeline moves on.
    """

    state: ClassVar[PipelineState]
    percent: ClassVar[int]
    label: ClassVar[str]
    fatal: ClassVar[bool] = True

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError

    def close(self) -> None:
        """Release resources held by the step, if any."""
