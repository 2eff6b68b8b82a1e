class ContentStoreError(Exception):
    """Base exception for content (blob) store failures."""


class UnsupportedStorageDiskError(ContentStoreError):
    """Raised when settings name a storage disk with no adapter."""


class StoragePathError(ContentStoreError):
    """Raised when a storage path escapes the bucket or already exists."""
