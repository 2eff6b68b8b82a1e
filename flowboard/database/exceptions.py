class RecordStoreError(Exception):
    """Base exception for record store (PostgreSQL) failures."""


class FileRecordNotFoundError(RecordStoreError):
    """Raised when an uploaded file record does not exist."""


class InvalidStatusTransitionError(RecordStoreError):
    """Raised when a file status change would leave the pending state twice."""
