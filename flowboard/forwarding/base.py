from abc import ABC, abstractmethod
from typing import Any


class BaseAutomationClient(ABC):
    """Contract for clients that deliver upload payloads to an automation tool."""

    @abstractmethod
    def post(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Deliver ``payload`` and return the receiver's response body.

        Raises:
            ForwardWarning: on transport errors, timeouts or non-2xx statuses.
                ``retryable`` is set for failures worth another attempt.
        """

    def close(self) -> None:
        """Release transport resources. The default holds none."""
