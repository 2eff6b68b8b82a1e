from datetime import timezone
from typing import Any

from flowboard.forwarding.base import BaseAutomationClient
from flowboard.ingestion.exceptions import ForwardWarning
from flowboard.ingestion.models import FileRecord, ForwardResult
from flowboard.ingestion.retry import call_with_retry
from flowboard.logging.logger import Log
from flowboard.parsing.models import ParsedPayload


def build_forward_payload(record: FileRecord, payload: ParsedPayload) -> dict[str, Any]:
    """Body posted to the automation endpoint."""
    upload_time = None
    if record.created_at is not None:
        upload_time = record.created_at.astimezone(timezone.utc).isoformat()
    return {
        "fileId": record.id,
        "fileName": record.file_name,
        "ownerId": record.owner_id,
        "payloadKind": payload.kind.value,
        "rows": [dict(row) for row in payload.rows],
        "uploadTime": upload_time,
    }


class NotificationForwarder:
    """Relays parsed uploads to the automation endpoint on a best-effort basis.

    ``forward`` never raises: a missing client is a skipped no-op and every
    delivery failure becomes a ForwardResult carrying a warning.
    """

    def __init__(
        self,
        client: BaseAutomationClient | None,
        *,
        retry_attempts: int = 3,
        retry_backoff_seconds: float = 0.5,
    ) -> None:
        self._client = client
        self._retry_attempts = retry_attempts
        self._retry_backoff_seconds = retry_backoff_seconds

    def forward(self, record: FileRecord, payload: ParsedPayload) -> ForwardResult:
        client = self._client
        if client is None:
            Log.info(f"No automation endpoint configured, skipping forward of file {record.id}")
            return ForwardResult(skipped=True)

        body = build_forward_payload(record, payload)
        attempts = 0

        def _deliver() -> dict[str, Any]:
            nonlocal attempts
            attempts += 1
            return client.post(body)

        try:
            response = call_with_retry(
                _deliver,
                description=f"Forward of file {record.id}",
                attempts=self._retry_attempts,
                backoff_seconds=self._retry_backoff_seconds,
                retry_on=(ForwardWarning,),
                should_retry=lambda exc: getattr(exc, "retryable", False),
            )
        except ForwardWarning as exc:
            Log.warning(f"Forwarding file {record.id} failed after {attempts} attempt(s): {exc}")
            return ForwardResult(warning=str(exc), attempts=attempts)
        except Exception as exc:
            Log.exception(f"Unexpected error forwarding file {record.id}")
            return ForwardResult(warning=f"Unexpected: {exc}", attempts=attempts)

        Log.info(f"Forwarded file {record.id} with {len(payload.rows)} rows")
        return ForwardResult(delivered=True, response=response, attempts=attempts)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
