from flowboard.ingestion.exceptions import ValidationError
from flowboard.ingestion.models import UploadCandidate
from flowboard.parsing.media_types import ALLOWED_MEDIA_TYPES, normalize_media_type

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class Validator:
    """Checks an upload's media type and size before anything else runs."""

    def __init__(
        self,
        max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        allowed_media_types: frozenset[str] = ALLOWED_MEDIA_TYPES,
    ) -> None:
        self._max_bytes = max_bytes
        self._allowed = allowed_media_types

    def validate(self, candidate: UploadCandidate) -> None:
        """Raise ValidationError when the candidate must not be processed.

        The size limit applies to both the declared size and the actual byte
        count, whichever is larger.
        """
        media_type = normalize_media_type(candidate.declared_media_type)
        if media_type not in self._allowed:
            raise ValidationError(
                f"Media type '{candidate.declared_media_type}' is not allowed",
                user_message="Unsupported file type. Upload CSV, Excel or JSON files.",
            )
        size = max(candidate.declared_size, len(candidate.raw_bytes))
        if size > self._max_bytes:
            raise ValidationError(
                f"File size {size} exceeds limit of {self._max_bytes} bytes",
                user_message=f"File is too large. Maximum size is {self._format_limit()}.",
            )

    def _format_limit(self) -> str:
        mib = self._max_bytes / (1024 * 1024)
        return f"{mib:g} MB"
