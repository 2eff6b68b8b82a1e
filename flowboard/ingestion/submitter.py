from flowboard.database.exceptions import RecordStoreError
from flowboard.database.repositories.uploaded_files_repository import UploadedFilesRepository
from flowboard.ingestion.exceptions import StorageError
from flowboard.ingestion.models import FileRecord, UploadCandidate
from flowboard.ingestion.retry import call_with_retry
from flowboard.logging.logger import Log
from flowboard.parsing.media_types import normalize_media_type
from flowboard.parsing.models import ParsedPayload
from flowboard.storage.base import BaseContentStore
from flowboard.storage.exceptions import ContentStoreError, StoragePathError
from flowboard.storage.paths import build_storage_path


class StorageSubmitter:
    """Writes the raw bytes to the content store, then the metadata record.

    Both writes must succeed. A blob written before a failed metadata insert
    is left in place; the orphaned path is logged.
    """

    def __init__(
        self,
        content_store: BaseContentStore,
        files_repo: UploadedFilesRepository,
        *,
        retry_attempts: int = 3,
        retry_backoff_seconds: float = 0.5,
    ) -> None:
        self._content_store = content_store
        self._files_repo = files_repo
        self._retry_attempts = retry_attempts
        self._retry_backoff_seconds = retry_backoff_seconds

    def submit(
        self,
        candidate: UploadCandidate,
        payload: ParsedPayload,
        owner_id: str,
    ) -> FileRecord:
        """Persist an upload and return its pending FileRecord.

        Raises:
            StorageError: if either the blob write or the metadata insert fails.
        """
        path = build_storage_path(candidate.original_name)

        try:
            stored_path = call_with_retry(
                lambda: self._content_store.put(path, candidate.raw_bytes),
                description=f"Content store write of {path}",
                attempts=self._retry_attempts,
                backoff_seconds=self._retry_backoff_seconds,
                retry_on=(ContentStoreError,),
                should_retry=lambda exc: not isinstance(exc, StoragePathError),
            )
        except ContentStoreError as exc:
            raise StorageError(
                f"Content store write failed for {path}: {exc}",
                user_message="The file could not be stored. Please try again.",
            ) from exc
        Log.info(f"Stored {len(candidate.raw_bytes)} bytes at {stored_path}")

        try:
            record = call_with_retry(
                lambda: self._files_repo.insert(
                    file_name=candidate.original_name,
                    storage_path=stored_path,
                    media_type=normalize_media_type(candidate.declared_media_type),
                    byte_size=len(candidate.raw_bytes),
                    owner_id=owner_id,
                    parsed_payload=payload,
                ),
                description=f"Metadata insert for {stored_path}",
                attempts=self._retry_attempts,
                backoff_seconds=self._retry_backoff_seconds,
                retry_on=(RecordStoreError,),
            )
        except RecordStoreError as exc:
            Log.warning(f"Metadata insert failed; blob left orphaned at {stored_path}")
            raise StorageError(
                f"Metadata insert failed for {stored_path}: {exc}",
                user_message="The file could not be saved. Please try again.",
            ) from exc

        Log.info(f"Created file record {record.id} for {candidate.original_name}")
        return record
