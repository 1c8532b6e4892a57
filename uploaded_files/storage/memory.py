import logging
import threading
from typing import BinaryIO

from uploaded_files.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class InMemoryStorage(StorageBackend):
    """Process-local storage, mostly useful for tests and local development."""

    def __init__(self) -> None:
        self._files: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def write_stream(self, key: str, stream: BinaryIO, content_type: str | None = None) -> None:
        data = stream.read()
        with self._lock:
            self._files[key] = data
        logger.debug("Stored %s (%d bytes) in memory", key, len(data))

    def get(self, key: str) -> bytes:
        with self._lock:
            if key not in self._files:
                raise FileNotFoundError(f"File not found: {key}")
            return self._files[key]

    def delete(self, key: str) -> None:
        with self._lock:
            self._files.pop(key, None)

    def file_exists(self, key: str) -> bool:
        with self._lock:
            return key in self._files

    def files(self) -> dict[str, bytes]:
        with self._lock:
            return dict(self._files)

    def clear(self) -> None:
        with self._lock:
            self._files.clear()
