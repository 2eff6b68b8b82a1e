from abc import ABC, abstractmethod


class BaseContentStore(ABC):
    """Contract for blob storage holding raw uploaded bytes."""

    @abstractmethod
    def put(self, path: str, data: bytes) -> str:
        """Store ``data`` under ``path`` and return the stored path.

        Raises:
            ContentStoreError: if the bytes cannot be written. An existing
                object at ``path`` is never overwritten.
        """

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Return the bytes stored under ``path``.

        Raises:
            FileNotFoundError: if nothing is stored at ``path``.
        """
