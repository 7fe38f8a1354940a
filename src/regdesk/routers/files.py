"""Uploaded file endpoints"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile
from sqlmodel import Session

from regdesk.config import config
from regdesk.models.database import get_db
from regdesk.services.exceptions import StoredFileNotFoundError, StoreError
from regdesk.services.file_service import (
    FileService,
    content_disposition,
    parse_file_id,
)

router = APIRouter(prefix="/files", tags=["Files"])

logger = logging.getLogger(__name__)


@router.get("")
async def download_file(
    id: Optional[str] = Query(None, description="Stored file ID"),
    db: Session = Depends(get_db),
):
    """Serve a stored file with its original content type and filename"""
    try:
        file_id = parse_file_id(id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        stored = FileService(db).get_file(file_id)
    except StoredFileNotFoundError:
        raise HTTPException(status_code=404, detail="File not found")
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return Response(
        content=stored.data,
        media_type=stored.content_type,
        headers={"Content-Disposition": content_disposition(stored.filename)},
    )


@router.post("", status_code=201)
async def upload_file(file: UploadFile = File(...), db: Session = Depends(get_db)):
    """Store an uploaded file; the returned id goes into a registration's uploadId"""
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    if len(data) > config["max_upload_bytes"]:
        raise HTTPException(status_code=413, detail="Uploaded file is too large")

    try:
        stored = FileService(db).save_file(file.filename, data, file.content_type)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {
        "success": True,
        "data": {
            "id": str(stored.id),
            "filename": stored.filename,
            "contentType": stored.content_type,
            "size": stored.size,
        },
    }
