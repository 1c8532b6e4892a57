from abc import ABC, abstractmethod
from typing import BinaryIO


class StorageBackend(ABC):
    @abstractmethod
    def write_stream(self, key: str, stream: BinaryIO, content_type: str | None = None) -> None:
        """Write the whole stream to ``key``, replacing any existing object."""
        ...

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Retrieve file data by key."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None: ...

    @abstractmethod
    def file_exists(self, key: str) -> bool: ...
