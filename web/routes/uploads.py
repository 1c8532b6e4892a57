from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from uploaded_files.forms import StarletteUpload, default_filename
from uploaded_files.services.upload_service import UploadService
from web.deps import get_upload_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/configurations")
async def list_configurations(service: UploadService = Depends(get_upload_service)):
    return {"configurations": service.get_configuration_names()}


@router.post("/uploads/{configuration}", status_code=201)
async def upload_file(
    request: Request,
    configuration: str,
    service: UploadService = Depends(get_upload_service),
):
    form = await request.form()
    upload = form.get("file")
    if not isinstance(upload, UploadFile) or not upload.filename:
        raise HTTPException(status_code=400, detail="No file submitted")

    source = StarletteUpload(upload)
    # Storage calls block; keep them off the event loop.
    url = await run_in_threadpool(service.upload, default_filename(source, None), source, configuration)
    if url is None:
        raise HTTPException(status_code=404, detail=f"Unknown upload configuration: {configuration}")

    logger.info("POST /uploads/%s stored %s", configuration, url)
    return {"url": url}


@router.delete("/uploads/{configuration}")
def delete_file(configuration: str, url: str, service: UploadService = Depends(get_upload_service)):
    deleted = service.delete(url, configuration)
    logger.info("DELETE /uploads/%s url=%s deleted=%s", configuration, url, deleted)
    return {"deleted": deleted}


@router.get("/uploads/{configuration}/exists")
def file_exists(configuration: str, url: str, service: UploadService = Depends(get_upload_service)):
    return {"exists": service.exists(url, configuration)}
