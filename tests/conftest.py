"""Root conftest — an in-memory filesystem and an UploadService wired to it."""

from __future__ import annotations

import pytest

from uploaded_files.services.upload_service import UploadService
from uploaded_files.storage.memory import InMemoryStorage

CONFIGURATIONS = {
    "default": {
        "filesystem": "test.filesystem",
        "base_uri": "https://cdn.example.com",
        "path": "/uploads",
    },
    "avatars": {
        "filesystem": "test.filesystem",
        "base_uri": "https://cdn.example.com",
        "path": "/avatars",
    },
    "no_path": {
        "filesystem": "test.filesystem",
        "base_uri": "https://cdn.example.com",
        "path": None,
    },
    "no_base_uri": {
        "filesystem": "test.filesystem",
        "base_uri": None,
        "path": "files",
    },
}


@pytest.fixture()
def filesystem() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture()
def upload_service(filesystem) -> UploadService:
    return UploadService(CONFIGURATIONS, {"test.filesystem": filesystem})
