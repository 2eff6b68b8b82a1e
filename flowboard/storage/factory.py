from flowboard.config.settings import Settings
from flowboard.storage.base import BaseContentStore
from flowboard.storage.exceptions import UnsupportedStorageDiskError
from flowboard.storage.local_adapter import LocalContentStore


class ContentStoreFactory:
    """Creates the content store adapter named by ``storage_disk``."""

    @classmethod
    def create(cls, settings: Settings) -> BaseContentStore:
        disk = settings.storage_disk.lower()
        if disk == "local":
            return LocalContentStore(settings.files_root, settings.storage_bucket)
        raise UnsupportedStorageDiskError(f"storage_disk '{disk}' is not supported")
