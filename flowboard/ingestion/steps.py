from flowboard.forwarding.forwarder import NotificationForwarder
from flowboard.ingestion.models import FileStatus, PipelineState
from flowboard.ingestion.pipeline import PipelineContext, PipelineStep
from flowboard.ingestion.status_updater import StatusUpdater
from flowboard.ingestion.submitter import StorageSubmitter
from flowboard.ingestion.validator import Validator
from flowboard.logging.logger import Log
from flowboard.parsing.factory import ParserFactory


class ValidateStep(PipelineStep):
    state = PipelineState.VALIDATING
    percent = 10
    label = "Validating file"

    def __init__(self, validator: Validator) -> None:
        self._validator = validator

    def run(self, context: PipelineContext) -> PipelineContext:
        self._validator.validate(context.candidate)
        Log.info(
            f"Validated {context.candidate.original_name} "
            f"({context.candidate.declared_media_type}, {len(context.candidate.raw_bytes)} bytes)"
        )
        return context


class ParseStep(PipelineStep):
    state = PipelineState.PARSING
    percent = 20
    label = "Parsing content"

    def run(self, context: PipelineContext) -> PipelineContext:
        parser = ParserFactory.for_media_type(context.candidate.declared_media_type)
        context.payload = parser.parse(context.candidate.raw_bytes)
        Log.info(
            f"Parsed {len(context.payload.rows)} rows from {context.candidate.original_name}"
        )
        return context


class SubmitStep(PipelineStep):
    state = PipelineState.SUBMITTING
    percent = 50
    label = "Uploading file"

    def __init__(self, submitter: StorageSubmitter) -> None:
        self._submitter = submitter

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.payload is None:
            raise ValueError("PipelineContext.payload must be set before submitting")
        context.record = self._submitter.submit(
            context.candidate,
            context.payload,
            context.owner_id,
        )
        return context


class ForwardStep(PipelineStep):
    state = PipelineState.FORWARDING
    percent = 80
    label = "Notifying automation"
    fatal = False

    def __init__(self, forwarder: NotificationForwarder) -> None:
        self._forwarder = forwarder

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.record is None or context.payload is None:
            raise ValueError("PipelineContext.record must be set before forwarding")
        result = self._forwarder.forward(context.record, context.payload)
        context.forward_result = result
        if result.warning:
            context.warnings.append(result.warning)
        return context

    def close(self) -> None:
        self._forwarder.close()


class FinalizeStep(PipelineStep):
    state = PipelineState.FINALIZING
    percent = 90
    label = "Finalizing"
    fatal = False

    def __init__(self, status_updater: StatusUpdater) -> None:
        self._status_updater = status_updater

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.record is None:
            raise ValueError("PipelineContext.record must be set before finalizing")
        result = context.forward_result
        status = FileStatus.PROCESSED if result is not None and result.ok else FileStatus.FAILED
        context.record = self._status_updater.mark_status(
            context.record.id,
            status,
            external_response=self._external_response(context),
            elapsed_ms=context.elapsed_ms(),
        )
        return context

    @staticmethod
    def _external_response(context: PipelineContext) -> dict[str, object] | None:
        result = context.forward_result
        if result is None:
            return {"error": "forwarding did not complete"}
        if result.skipped:
            return None
        if result.delivered:
            return result.response
        return {"error": result.warning, "attempts": result.attempts}
