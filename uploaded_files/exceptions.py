from __future__ import annotations


class UploadError(Exception):
    """Base class for every failure raised by the upload façade."""

    def __init__(self, message: str, configuration: str | None = None, key: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.configuration = configuration
        self.key = key


class NoConfiguration(UploadError, LookupError):
    """The registry holds no configuration at all."""


class BackendNotFound(UploadError, LookupError):
    """A configuration points at a filesystem reference nobody registered."""


class BackendTypeMismatch(UploadError, TypeError):
    """The registered filesystem does not implement ``StorageBackend``."""


class ReadSourceFailed(UploadError):
    """The uploaded byte source could not be opened."""


class BackendWriteFailed(UploadError):
    pass


class BackendDeleteFailed(UploadError):
    pass
