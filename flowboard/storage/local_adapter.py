from pathlib import Path

from flowboard.storage.base import BaseContentStore
from flowboard.storage.exceptions import ContentStoreError, StoragePathError


class LocalContentStore(BaseContentStore):
    """Stores blobs on the local filesystem under {files_root}/{bucket}/{path}."""

    def __init__(self, files_root: Path, bucket: str) -> None:
        self._bucket_root = (files_root / bucket).resolve()

    def put(self, path: str, data: bytes) -> str:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("xb") as fh:
                fh.write(data)
        except FileExistsError as exc:
            raise StoragePathError(f"Object already exists: {path}") from exc
        except OSError as exc:
            raise ContentStoreError(f"Failed to write {path}: {exc}") from exc
        return path

    def read(self, path: str) -> bytes:
        target = self._resolve(path)
        if not target.exists():
            raise FileNotFoundError(f"File not found: {target}")
        return target.read_bytes()

    def _resolve(self, path: str) -> Path:
        target = (self._bucket_root / path).resolve()
        if not target.is_relative_to(self._bucket_root):
            raise StoragePathError(f"Path escapes bucket: {path}")
        return target
