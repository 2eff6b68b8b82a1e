CSV = "text/csv"
XLS = "application/vnd.ms-excel"
XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
JSON = "application/json"

ALLOWED_MEDIA_TYPES = frozenset({CSV, XLS, XLSX, JSON})

_EXTENSIONS = {
    ".csv": CSV,
    ".xls": XLS,
    ".xlsx": XLSX,
    ".json": JSON,
}


def normalize_media_type(media_type: str) -> str:
    """Lowercase a media type and drop parameters such as ``; charset=utf-8``."""
    return media_type.split(";", 1)[0].strip().lower()


def guess_media_type(file_name: str) -> str:
    """Guess an upload media type from its extension. Empty string if unknown."""
    lowered = file_name.lower()
    for extension, media_type in _EXTENSIONS.items():
        if lowered.endswith(extension):
            return media_type
    return ""
