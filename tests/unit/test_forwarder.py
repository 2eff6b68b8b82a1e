from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

from flowboard.forwarding.base import BaseAutomationClient
from flowboard.forwarding.forwarder import NotificationForwarder, build_forward_payload
from flowboard.ingestion.exceptions import ForwardWarning
from flowboard.ingestion.models import FileRecord, FileStatus
from flowboard.parsing.models import ParsedPayload, PayloadKind

_PAYLOAD = ParsedPayload(
    kind=PayloadKind.TABULAR_CSV,
    rows=({"id": "1", "name": "Alice"}, {"id": "2", "name": "Bob"}),
)


def _record() -> FileRecord:
    return FileRecord(
        id="file-1",
        file_name="people.csv",
        storage_path="uploads/x_people.csv",
        media_type="text/csv",
        byte_size=20,
        owner_id="user-1",
        status=FileStatus.PENDING,
        created_at=datetime(2024, 1, 15, 12, 0, tzinfo=timezone(timedelta(hours=2))),
    )


def _forwarder(client: MagicMock | None) -> NotificationForwarder:
    return NotificationForwarder(client, retry_attempts=3, retry_backoff_seconds=0)


class TestBuildForwardPayload:
    def test_body_shape(self) -> None:
        body = build_forward_payload(_record(), _PAYLOAD)

        assert body == {
            "fileId": "file-1",
            "fileName": "people.csv",
            "ownerId": "user-1",
            "payloadKind": "tabular-csv",
            "rows": [{"id": "1", "name": "Alice"}, {"id": "2", "name": "Bob"}],
            "uploadTime": "2024-01-15T10:00:00+00:00",
        }

    def test_missing_created_at(self) -> None:
        record = _record()
        record.created_at = None
        assert build_forward_payload(record, _PAYLOAD)["uploadTime"] is None


class TestForward:
    def test_skips_without_client(self) -> None:
        result = _forwarder(None).forward(_record(), _PAYLOAD)

        assert result.skipped is True
        assert result.ok is True
        assert result.warning is None

    def test_delivers(self) -> None:
        client = MagicMock(spec=BaseAutomationClient)
        client.post.return_value = {"accepted": True}

        result = _forwarder(client).forward(_record(), _PAYLOAD)

        assert result.delivered is True
        assert result.response == {"accepted": True}
        assert result.attempts == 1
        assert client.post.call_args.args[0]["fileId"] == "file-1"

    def test_retries_retryable_failures(self) -> None:
        client = MagicMock(spec=BaseAutomationClient)
        client.post.side_effect = [
            ForwardWarning("HTTP 502", status_code=502, retryable=True),
            {"accepted": True},
        ]

        result = _forwarder(client).forward(_record(), _PAYLOAD)

        assert result.delivered is True
        assert result.attempts == 2

    def test_non_retryable_failure_is_a_warning(self) -> None:
        client = MagicMock(spec=BaseAutomationClient)
        client.post.side_effect = ForwardWarning("HTTP 400", status_code=400, retryable=False)

        result = _forwarder(client).forward(_record(), _PAYLOAD)

        assert result.ok is False
        assert result.warning == "HTTP 400"
        assert result.attempts == 1

    def test_exhausted_retries_are_a_warning(self) -> None:
        client = MagicMock(spec=BaseAutomationClient)
        client.post.side_effect = ForwardWarning("unreachable", retryable=True)

        result = _forwarder(client).forward(_record(), _PAYLOAD)

        assert result.delivered is False
        assert result.warning == "unreachable"
        assert result.attempts == 3

    def test_unexpected_error_never_escapes(self) -> None:
        client = MagicMock(spec=BaseAutomationClient)
        client.post.side_effect = RuntimeError("bug")

        result = _forwarder(client).forward(_record(), _PAYLOAD)

        assert result.ok is False
        assert result.warning == "Unexpected: bug"

    def test_close_releases_client(self) -> None:
        client = MagicMock(spec=BaseAutomationClient)

        _forwarder(client).close()

        client.close.assert_called_once_with()

    def test_close_without_client_is_a_no_op(self) -> None:
        _forwarder(None).close()
