from typing import Any

import httpx

from flowboard.forwarding.base import BaseAutomationClient
from flowboard.ingestion.exceptions import ForwardWarning


def should_retry_status(status_code: int) -> bool:
    """Only server-side failures are worth another attempt."""
    return status_code >= 500


class WebhookClient(BaseAutomationClient):
    """Posts JSON payloads to a workflow-automation webhook over HTTP."""

    def __init__(
        self,
        *,
        url: str,
        timeout_seconds: float,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._url = url
        self._client = httpx.Client(timeout=timeout_seconds, transport=transport)

    def post(self, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self._client.post(self._url, json=payload)
        except httpx.TimeoutException as exc:
            raise ForwardWarning(f"Webhook timed out: {exc}", retryable=True) from exc
        except httpx.HTTPError as exc:
            raise ForwardWarning(f"Webhook transport error: {exc}", retryable=True) from exc

        if not response.is_success:
            raise ForwardWarning(
                f"Webhook returned HTTP {response.status_code}",
                status_code=response.status_code,
                retryable=should_retry_status(response.status_code),
            )
        return self._decode_body(response)

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _decode_body(response: httpx.Response) -> dict[str, Any]:
        if not response.content:
            return {"status_code": response.status_code}
        try:
            body = response.json()
        except ValueError:
            return {"status_code": response.status_code, "body": response.text}
        if isinstance(body, dict):
            return body
        return {"status_code": response.status_code, "body": body}
