class IngestionError(Exception):
    """Base exception for all upload pipeline errors.

    ``user_message`` is safe to show in the UI; the exception text may carry
    infrastructure details meant for logs.
    """

    def __init__(self, message: str, *, user_message: str | None = None) -> None:
        super().__init__(message)
        self.user_message = user_message or message


class ValidationError(IngestionError):
    """Raised when an upload's media type or size is not acceptable."""


class ParseError(IngestionError):
    """Raised when file content cannot be turned into rows."""


class StorageError(IngestionError):
    """Raised when the content store or the record store fails."""


class ForwardWarning(IngestionError):
    """Raised by automation clients; the forwarder downgrades it to a warning."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.retryable = retryable
