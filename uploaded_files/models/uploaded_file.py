from __future__ import annotations

import io
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class ByteSource(Protocol):
    """Anything the upload service can read an upload from.

    ``open()`` hands over a fresh binary stream; the caller owns it and
    closes it once the write is done.
    """

    filename: str
    content_type: str | None

    def open(self) -> BinaryIO: ...


class LocalFile:
    """An upload that already sits on disk (e.g. a spooled temp file)."""

    def __init__(self, path: str | Path, filename: str = "", content_type: str | None = None) -> None:
        self.path = Path(path)
        self.filename = filename or self.path.name
        self.content_type = content_type

    def open(self) -> BinaryIO:
        return self.path.open("rb")

    def __repr__(self) -> str:
        return f"LocalFile({str(self.path)!r}, filename={self.filename!r})"


class BytesFile:
    def __init__(self, data: bytes, filename: str = "", content_type: str | None = None) -> None:
        self.data = data
        self.filename = filename
        self.content_type = content_type

    def open(self) -> BinaryIO:
        return io.BytesIO(self.data)

    def __repr__(self) -> str:
        return f"BytesFile({len(self.data)} bytes, filename={self.filename!r})"
