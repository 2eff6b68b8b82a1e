from collections.abc import Callable, Iterator

from flowboard.config.settings import Settings
from flowboard.database.repositories.uploaded_files_repository import UploadedFilesRepository
from flowboard.database.repositories.workflow_logs_repository import WorkflowLogsRepository
from flowboard.forwarding.factory import AutomationClientFactory
from flowboard.forwarding.forwarder import NotificationForwarder
from flowboard.ingestion.exceptions import IngestionError
from flowboard.ingestion.models import (
    FileRecord,
    PipelineState,
    ProgressEvent,
    UploadCandidate,
)
from flowboard.ingestion.pipeline import PipelineContext, PipelineStep
from flowboard.ingestion.status_updater import StatusUpdater
from flowboard.ingestion.steps import (
    FinalizeStep,
    ForwardStep,
    ParseStep,
    SubmitStep,
    ValidateStep,
)
from flowboard.ingestion.submitter import StorageSubmitter
from flowboard.ingestion.validator import Validator
from flowboard.logging.logger import Log
from flowboard.storage.factory import ContentStoreFactory


class UploadOrchestrator:
    """Runs one upload through its steps, strictly in order.

    Pipeline: validate -> parse -> submit -> forward -> finalize.
    The first fatal failure stops the run; forward and finalize problems are
    recorded as warnings and the run still ends in DONE.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps
        self.state = PipelineState.IDLE

    def upload_and_process(
        self,
        raw_bytes: bytes,
        declared_media_type: str,
        declared_size: int,
        original_name: str,
        owner_id: str,
    ) -> Iterator[ProgressEvent]:
        """Yield a ProgressEvent per state; the DONE event carries the record.

        On a fatal failure a FAILED event is yielded and the originating
        exception is raised.
        """
        candidate = UploadCandidate(
            raw_bytes=raw_bytes,
            declared_media_type=declared_media_type,
            declared_size=declared_size,
            original_name=original_name,
        )
        context = PipelineContext(candidate=candidate, owner_id=owner_id)
        self.state = PipelineState.IDLE
        Log.info(f"Processing upload {original_name} for owner {owner_id}")

        percent = 0
        for step in self._steps:
            self.state = step.state
            percent = step.percent
            yield ProgressEvent(percent=percent, phase_label=step.label, state=step.state)

            failure: Exception | None = None
            try:
                context = step.run(context)
            except Exception as exc:
                if not step.fatal:
                    self._record_warning(context, step, exc)
                    continue
                failure = exc

            if failure is not None:
                self.state = PipelineState.FAILED
                context.error_message = str(failure)
                Log.error(f"Upload {original_name} failed while {step.state.value}: {failure}")
                yield ProgressEvent(
                    percent=percent,
                    phase_label="Failed",
                    state=PipelineState.FAILED,
                    record=context.record,
                    error=self._user_message(failure),
                )
                raise failure

        self.state = PipelineState.DONE
        Log.info(
            f"Upload {original_name} done in {context.elapsed_ms()} ms "
            f"with {len(context.warnings)} warning(s)"
        )
        yield ProgressEvent(
            percent=100,
            phase_label="Done",
            state=PipelineState.DONE,
            record=context.record,
            warnings=tuple(context.warnings),
        )

    def process(
        self,
        raw_bytes: bytes,
        declared_media_type: str,
        declared_size: int,
        original_name: str,
        owner_id: str,
        on_progress: Callable[[ProgressEvent], None] | None = None,
    ) -> FileRecord:
        """Run the pipeline to completion and return the final FileRecord."""
        record: FileRecord | None = None
        for event in self.upload_and_process(
            raw_bytes, declared_media_type, declared_size, original_name, owner_id
        ):
            if on_progress is not None:
                on_progress(event)
            if event.state == PipelineState.DONE:
                record = event.record
        if record is None:
            raise RuntimeError(f"Upload {original_name} finished without a file record")
        return record

    def close(self) -> None:
        """Close every step's resources, such as the webhook HTTP client."""
        for step in self._steps:
            step.close()

    def __enter__(self) -> "UploadOrchestrator":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @staticmethod
    def _record_warning(context: PipelineContext, step: PipelineStep, exc: Exception) -> None:
        message = f"{step.label} failed: {exc}"
        context.warnings.append(message)
        if isinstance(exc, IngestionError):
            Log.warning(message)
        else:
            Log.exception(message)

    @staticmethod
    def _user_message(exc: Exception) -> str:
        if isinstance(exc, IngestionError):
            return exc.user_message
        return "Upload failed due to an internal error."


def build_orchestrator(settings: Settings) -> UploadOrchestrator:
    """Build an UploadOrchestrator with all required adapters."""
    files_repo = UploadedFilesRepository()
    submitter = StorageSubmitter(
        ContentStoreFactory.create(settings),
        files_repo,
        retry_attempts=settings.retry_attempts,
        retry_backoff_seconds=settings.retry_backoff_seconds,
    )
    forwarder = NotificationForwarder(
        AutomationClientFactory.create(settings),
        retry_attempts=settings.retry_attempts,
        retry_backoff_seconds=settings.retry_backoff_seconds,
    )
    status_updater = StatusUpdater(files_repo, WorkflowLogsRepository())
    return UploadOrchestrator(
        steps=[
            ValidateStep(Validator(max_bytes=settings.max_upload_bytes)),
            ParseStep(),
            SubmitStep(submitter),
            ForwardStep(forwarder),
            FinalizeStep(status_updater),
        ]
    )
