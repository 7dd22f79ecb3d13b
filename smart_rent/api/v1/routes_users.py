# File: smart_rent/api/v1/routes_users.py

import logging
from pathlib import Path
from typing import Annotated, List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError

from smart_rent.api.deps import DbSession, Landlord, get_upload_dir
from smart_rent.models.user import User
from smart_rent.schemas.user import DocumentUploadResponse
from smart_rent.services.document_service import (
    DocumentRejected,
    attach_documents,
    check_uploads,
    store_uploads,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/upload-documents",
    response_model=DocumentUploadResponse,
    summary="Upload landlord verification documents",
)
def upload_documents(
    db: DbSession,
    landlord: Landlord,
    upload_dir: Annotated[Path, Depends(get_upload_dir)],
    documents: List[UploadFile] = File(...),
):
    """
    Accepts up to 5 PDF, JPEG or PNG files in the "documents" field.

    The account goes back to unverified until the documents are reviewed.
    """
    try:
        check_uploads(documents)
    except DocumentRejected as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    user = db.get(User, landlord.user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if user.role != "landlord":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only landlords can upload documents",
        )

    try:
        paths = store_uploads(documents, upload_dir)
    except OSError:
        logger.exception("Could not store documents for user %s", user.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Upload failed",
        )

    try:
        attach_documents(db, user, paths)
    except SQLAlchemyError:
        logger.exception("Could not record documents for user %s", user.id)
        db.rollback()
        for path in paths:
            Path(path).unlink(missing_ok=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Upload failed",
        )

    return DocumentUploadResponse(message="Documents uploaded", files=paths)
