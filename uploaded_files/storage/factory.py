from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from uploaded_files.settings import FilesystemSettings
from uploaded_files.storage.base import StorageBackend

logger = logging.getLogger(__name__)


def get_storage(fs: FilesystemSettings) -> StorageBackend:
    backend = fs.type

    if backend == "local":
        from uploaded_files.storage.local import LocalStorage

        logger.info("Using storage backend: local path=%s", fs.local_path)
        return LocalStorage(fs.local_path)

    if backend == "s3":
        from uploaded_files.storage.s3 import S3Storage

        logger.info("Using storage backend: s3 bucket=%s", fs.s3_bucket)
        return S3Storage(
            bucket=fs.s3_bucket,
            region=fs.s3_region,
            access_key_id=fs.s3_access_key_id,
            secret_access_key=fs.s3_secret_access_key,
            endpoint_url=fs.s3_endpoint_url,
        )

    if backend == "memory":
        from uploaded_files.storage.memory import InMemoryStorage

        logger.info("Using storage backend: memory")
        return InMemoryStorage()

    raise ValueError(f"Unsupported storage backend: {backend}")


def build_backends(filesystems: Mapping[str, FilesystemSettings]) -> BackendLocator:
    return BackendLocator({ref: get_storage(fs) for ref, fs in filesystems.items()})


class BackendLocator:
    """Closed map from filesystem reference to backend instance.

    Values are not type-checked here; the upload service verifies that what
    it gets back really is a ``StorageBackend``.
    """

    def __init__(self, backends: Mapping[str, object] | None = None) -> None:
        self._backends = MappingProxyType(dict(backends or {}))

    def has(self, ref: str) -> bool:
        return ref in self._backends

    def get(self, ref: str) -> object:
        return self._backends[ref]

    def refs(self) -> list[str]:
        return list(self._backends)

    def __iter__(self) -> Iterator[str]:
        return iter(self._backends)

    def __len__(self) -> int:
        return len(self._backends)
