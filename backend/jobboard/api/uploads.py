from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, Query, UploadFile

from jobboard.auth import Actor, get_current_actor
from jobboard.dependencies import get_blob_store
from jobboard.schemas.upload import UploadResponse
from jobboard.services.blob_store import BlobStore, validate_upload


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=UploadResponse)
def upload_file(
    kind: str = Query(..., description="logo, license or resume"),
    file: UploadFile = File(...),
    actor: Actor = Depends(get_current_actor),
    blob_store: BlobStore = Depends(get_blob_store),
) -> UploadResponse:
    raw = file.file.read()
    safe_name = validate_upload(kind, file.filename, len(raw))
    logger.info("User %s uploading %s (%s, %d bytes)", actor.user_id, safe_name, kind, len(raw))
    url = blob_store.upload(f"u{actor.user_id}_{safe_name}", raw, file.content_type, kind)
    return UploadResponse(url=url)
