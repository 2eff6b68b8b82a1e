import re
import secrets
from datetime import datetime, timezone

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
_MAX_NAME_LENGTH = 120


def sanitize_file_name(original_name: str) -> str:
    """Reduce a client-supplied file name to a safe single path segment."""
    base = original_name.replace("\\", "/").rsplit("/", 1)[-1]
    cleaned = _UNSAFE_CHARS.sub("_", base).strip("._")
    return cleaned[-_MAX_NAME_LENGTH:] or "upload"


def build_storage_path(original_name: str, now: datetime | None = None) -> str:
    """Build a collision-resistant path: uploads/{utc-timestamp-us}_{random}_{name}"""
    moment = now or datetime.now(timezone.utc)
    stamp = moment.strftime("%Y%m%d%H%M%S%f")
    suffix = secrets.token_hex(4)
    return f"uploads/{stamp}_{suffix}_{sanitize_file_name(original_name)}"
