import logging
import shutil
from pathlib import Path
from typing import BinaryIO

from uploaded_files.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class LocalStorage(StorageBackend):
    def __init__(self, base_dir: str) -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        root = self.base_dir.resolve()
        path = (root / key).resolve()
        if path != root and root not in path.parents:
            raise ValueError(f"Key escapes the storage directory: {key}")
        return path

    def write_stream(self, key: str, stream: BinaryIO, content_type: str | None = None) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("wb") as target:
            shutil.copyfileobj(stream, target)
        logger.debug("Saved %s to %s", key, path)

    def get(self, key: str) -> bytes:
        path = self._path(key)
        logger.debug("Reading %s from %s", key, path)
        return path.read_bytes()

    def delete(self, key: str) -> None:
        path = self._path(key)
        path.unlink()
        logger.debug("Deleted %s (%s)", key, path)

    def file_exists(self, key: str) -> bool:
        return self._path(key).is_file()
