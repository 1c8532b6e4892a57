from __future__ import annotations

import logging
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from uploaded_files.exceptions import UploadError
from uploaded_files.logging import configure_logging
from web.deps import get_upload_service
from web.routes.uploads import router as uploads_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    service = get_upload_service()
    logger.info("Application started with configurations: %s", ", ".join(service.get_configuration_names()))
    yield


app = FastAPI(docs_url=None, redoc_url=None, lifespan=lifespan)

app.include_router(uploads_router)


@app.exception_handler(UploadError)
async def upload_error_handler(request: Request, exc: UploadError):
    logger.error(
        "Upload failure on %s %s (configuration=%s key=%s):\n%s",
        request.method,
        request.url.path,
        exc.configuration,
        exc.key,
        traceback.format_exc(),
    )
    return JSONResponse({"detail": exc.message}, status_code=500)
