# app/uploads/views.py
import logging
from typing import List
from fastapi import APIRouter, Depends, Request

from .schema import UploadCreate, UploadRecord
from .service import UploadStore
from app.dependencies import get_upload_store
from app.errors import error_response
from config import ErrorMessages

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/uploads", tags=["Uploads"])


@router.post("", response_model=UploadRecord, status_code=201)
def create_upload(req: UploadCreate, request: Request, store: UploadStore = Depends(get_upload_store)):
    ip_address = request.client.host if request.client else None
    try:
        return store.create(req, ip_address=ip_address)
    except Exception:
        logger.exception("Error saving upload")
        return error_response(500, ErrorMessages.UPLOAD_FAILED)


@router.get("", response_model=List[UploadRecord])
def list_uploads(store: UploadStore = Depends(get_upload_store)):
    try:
        return store.list()
    except Exception:
        logger.exception("Error fetching uploads")
        return error_response(500, ErrorMessages.UPLOAD_LIST_FAILED)
