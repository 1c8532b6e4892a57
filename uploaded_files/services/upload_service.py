from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import BinaryIO

from uploaded_files.exceptions import (
    BackendDeleteFailed,
    BackendNotFound,
    BackendTypeMismatch,
    BackendWriteFailed,
    ReadSourceFailed,
)
from uploaded_files.models.configuration import UploadConfiguration
from uploaded_files.models.uploaded_file import ByteSource
from uploaded_files.registry import ConfigurationRegistry
from uploaded_files.storage.base import StorageBackend
from uploaded_files.storage.factory import BackendLocator

logger = logging.getLogger(__name__)


def storage_key(filename: str, config: UploadConfiguration) -> str:
    base_path = config.base_path
    key = f"{base_path}/{filename}" if base_path else filename
    return key.lstrip("/")


def public_url(key: str, config: UploadConfiguration) -> str:
    base_uri = config.public_base
    return f"{base_uri}/{key}" if base_uri else f"/{key}"


def key_from_url(url: str, config: UploadConfiguration) -> str:
    """Recover the storage key from a URL issued under ``config``.

    Relies on ``base_uri`` being unchanged since the upload; a URL that does
    not carry the prefix is treated as an absolute path.
    """
    base_uri = config.public_base
    if base_uri and url.startswith(base_uri + "/"):
        return url[len(base_uri) + 1 :]
    return url.lstrip("/")


class _SourceReader:
    """Binary stream wrapper that reports read-side failures as ``ReadSourceFailed``.

    Backends only see this wrapper, so an error raised while pulling bytes out
    of the upload is told apart from one raised by the backend itself.
    """

    def __init__(self, stream: BinaryIO, configuration: str | None, key: str) -> None:
        self._stream = stream
        self._configuration = configuration
        self._key = key

    def _failed(self, exc: Exception) -> ReadSourceFailed:
        return ReadSourceFailed(
            f"Could not read upload for {self._key}: {exc}",
            configuration=self._configuration,
            key=self._key,
        )

    def read(self, size: int = -1) -> bytes:
        try:
            return self._stream.read(size)
        except (OSError, ValueError) as exc:
            raise self._failed(exc) from exc

    def readinto(self, buffer) -> int:
        try:
            return self._stream.readinto(buffer)
        except (OSError, ValueError) as exc:
            raise self._failed(exc) from exc

    def readable(self) -> bool:
        return True

    def close(self) -> None:
        self._stream.close()

    def __getattr__(self, name: str):
        return getattr(self._stream, name)

    def __enter__(self) -> _SourceReader:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class UploadService:
    """Stores, deletes and checks uploads through named configurations.

    Stateless apart from the immutable registry and backend map, so a single
    instance can be shared between threads.
    """

    def __init__(
        self,
        configurations: ConfigurationRegistry | Mapping,
        backends: BackendLocator | Mapping[str, object],
    ) -> None:
        if not isinstance(configurations, ConfigurationRegistry):
            configurations = ConfigurationRegistry(configurations)
        if not isinstance(backends, BackendLocator):
            backends = BackendLocator(backends)
        self.registry = configurations
        self.backends = backends

    # ---- Configuration lookup ----

    def has_configuration(self, configuration: str) -> bool:
        return self.registry.has(configuration)

    def get_configuration(self, configuration: str = "default") -> UploadConfiguration:
        """Return the named configuration, or the first one when the name is unknown."""
        return self.registry.resolve(configuration)

    def get_configuration_names(self) -> list[str]:
        return self.registry.names()

    # ---- Path / URL translation ----

    def storage_key(self, filename: str, configuration: str) -> str:
        return storage_key(filename, self.registry.resolve(configuration))

    def public_url(self, key: str, configuration: str) -> str:
        return public_url(key, self.registry.resolve(configuration))

    def key_from_url(self, url: str, configuration: str) -> str:
        return key_from_url(url, self.registry.resolve(configuration))

    # ---- Operations ----

    def upload(self, filename: str, source: ByteSource, configuration: str | None) -> str | None:
        """Write ``source`` under ``filename`` and return its public URL.

        Returns None, without touching storage, when no configuration is
        given or the name is not registered.
        """
        config = self.registry.get(configuration)
        if config is None:
            logger.debug("Skipping upload of %s: no configuration %r", filename, configuration)
            return None

        key = storage_key(filename, config)
        backend = self._get_backend(config.filesystem, configuration)

        try:
            stream = source.open()
        except (OSError, ValueError) as exc:
            raise ReadSourceFailed(
                f"Could not open {source!r} for reading: {exc}",
                configuration=configuration,
                key=key,
            ) from exc

        with _SourceReader(stream, configuration, key) as reader:
            try:
                backend.write_stream(key, reader, content_type=getattr(source, "content_type", None))
            except ReadSourceFailed:
                raise
            except Exception as exc:
                raise BackendWriteFailed(
                    f"Failed to write {key} for configuration {configuration!r}: {exc}",
                    configuration=configuration,
                    key=key,
                ) from exc

        url = public_url(key, config)
        logger.info("Uploaded %s via %s -> %s", key, configuration, url)
        return url

    def delete(self, url: str, configuration: str | None) -> bool:
        """Delete the object behind ``url``. False when it (or the configuration) is absent."""
        config = self.registry.get(configuration)
        if config is None:
            return False

        key = key_from_url(url, config)
        backend = self._get_backend(config.filesystem, configuration)

        if not backend.file_exists(key):
            logger.debug("Nothing to delete at %s (%s)", key, configuration)
            return False

        try:
            backend.delete(key)
        except Exception as exc:
            raise BackendDeleteFailed(
                f"Failed to delete {key} for configuration {configuration!r}: {exc}",
                configuration=configuration,
                key=key,
            ) from exc

        logger.info("Deleted %s via %s", key, configuration)
        return True

    def exists(self, url: str, configuration: str | None) -> bool:
        config = self.registry.get(configuration)
        if config is None:
            return False

        key = key_from_url(url, config)
        backend = self._get_backend(config.filesystem, configuration)
        return backend.file_exists(key)

    def _get_backend(self, ref: str, configuration: str | None = None) -> StorageBackend:
        if not self.backends.has(ref):
            raise BackendNotFound(
                f'Filesystem "{ref}" not found. Make sure it is configured correctly.',
                configuration=configuration,
            )

        backend = self.backends.get(ref)
        if not isinstance(backend, StorageBackend):
            raise BackendTypeMismatch(
                f'Filesystem "{ref}" must implement StorageBackend, got {type(backend).__name__}.',
                configuration=configuration,
            )
        return backend
