"""Web test fixtures — TestClient over an UploadService backed by memory."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from uploaded_files.services.upload_service import UploadService
from uploaded_files.storage.base import StorageBackend
from uploaded_files.storage.memory import InMemoryStorage


class BrokenStorage(InMemoryStorage):
    def write_stream(self, key, stream, content_type=None):
        raise OSError("bucket unavailable")


@pytest.fixture()
def web_filesystem() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture()
def web_service(web_filesystem) -> UploadService:
    backends: dict[str, StorageBackend] = {"cdn": web_filesystem, "broken": BrokenStorage()}
    return UploadService(
        {
            "images": {"filesystem": "cdn", "base_uri": "https://cdn.example.com", "path": "/images"},
            "broken": {"filesystem": "broken", "base_uri": "https://cdn.example.com"},
        },
        backends,
    )


@pytest.fixture()
def client(web_service):
    from web.app import app
    from web.deps import get_upload_service

    app.dependency_overrides[get_upload_service] = lambda: web_service
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
