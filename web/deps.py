from __future__ import annotations

import logging
from functools import lru_cache

from uploaded_files.registry import load_configurations
from uploaded_files.services.upload_service import UploadService
from uploaded_files.settings import settings
from uploaded_files.storage.factory import build_backends

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_upload_service() -> UploadService:
    """Build the shared UploadService once from settings."""
    registry = load_configurations(settings.configurations)
    backends = build_backends(settings.filesystems)
    logger.info("Upload service ready with filesystems: %s", ", ".join(backends.refs()))
    return UploadService(registry, backends)
