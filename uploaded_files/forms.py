from __future__ import annotations

import logging
import mimetypes
import re
import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any, BinaryIO

from uploaded_files.models.uploaded_file import ByteSource
from uploaded_files.services.upload_service import UploadService

logger = logging.getLogger(__name__)

CONTENT_TYPE_EXTENSIONS = {
    "application/pdf": "pdf",
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
    "text/plain": "txt",
    "text/csv": "csv",
}
DEFAULT_EXTENSION = "bin"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_-]")

FilenameCallback = Callable[[ByteSource, Any], str]


def guess_extension(content_type: str | None) -> str | None:
    if not content_type:
        return None
    content_type = content_type.split(";", 1)[0].strip().lower()
    if content_type in CONTENT_TYPE_EXTENSIONS:
        return CONTENT_TYPE_EXTENSIONS[content_type]
    ext = mimetypes.guess_extension(content_type)
    return ext.lstrip(".") if ext else None


def default_filename(file: ByteSource, item: Any) -> str:
    """Build ``<safe-name>_<random hex>.<ext>`` from the client filename.

    The extension comes from the content type when it is known, then from
    the original filename, then falls back to ``bin``.
    """
    original = PurePath(file.filename or "")
    extension = guess_extension(file.content_type) or original.suffix.lstrip(".") or DEFAULT_EXTENSION

    safe_name = _UNSAFE_CHARS.sub("_", original.stem).strip("_").lower() or "file"
    token = secrets.token_hex(8)

    return f"{safe_name}_{token}.{extension}"


@dataclass(frozen=True)
class FieldAccessor:
    """Typed getter/setter pair for the model field an upload is bound to."""

    getter: Callable[[Any], str | None]
    setter: Callable[[Any, str], None]

    @classmethod
    def attribute(cls, name: str) -> FieldAccessor:
        return cls(
            getter=lambda item: getattr(item, name, None),
            setter=lambda item, value: setattr(item, name, value),
        )


@dataclass
class UploadField:
    """Stores the file submitted for one model field and writes back its URL."""

    name: str
    configuration: str | None
    accessor: FieldAccessor | None = None
    filename: FilenameCallback = default_filename
    delete_previous: bool = True
    service: UploadService | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.accessor is None:
            self.accessor = FieldAccessor.attribute(self.name)

    def bind(self, service: UploadService) -> UploadField:
        self.service = service
        return self

    def handle_submission(self, file: ByteSource | None, item: Any) -> str | None:
        """Process one submitted file for ``item``.

        Returns the new URL, or None when nothing was stored. Storage errors
        propagate; a previous file deleted before a failed upload stays deleted.
        """
        if file is None or not file.filename:
            return None
        if self.service is None:
            raise RuntimeError(f"Upload field {self.name!r} is not bound to an UploadService")

        if self.delete_previous and item is not None:
            previous = self.accessor.getter(item)
            if isinstance(previous, str) and previous:
                self.service.delete(previous, self.configuration)

        filename = self.filename(file, item)
        url = self.service.upload(filename, file, self.configuration)

        if url is not None and item is not None:
            self.accessor.setter(item, url)
            logger.info("Stored %s for field %s: %s", file.filename, self.name, url)
        return url

    def view_vars(self, item: Any) -> dict[str, Any]:
        if self.configuration is None or item is None:
            return {}
        url = self.accessor.getter(item)
        if not isinstance(url, str) or not url:
            return {}
        return {"url": url, "upload_configuration": self.configuration, "required": False}


class StarletteUpload:
    """Byte source over a Starlette/FastAPI ``UploadFile``."""

    def __init__(self, upload: Any) -> None:
        self.upload = upload
        self.filename = upload.filename or ""
        self.content_type = upload.content_type

    def open(self) -> BinaryIO:
        self.upload.file.seek(0)
        return self.upload.file

    def __repr__(self) -> str:
        return f"StarletteUpload({self.filename!r})"
