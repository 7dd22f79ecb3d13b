# File: smart_rent/services/document_service.py

"""
Landlord verification documents.

A request is checked as a whole before any byte is written. Files land in
the upload directory as "<epoch millis>-<original name>". Recording them on
the user always resets the account to unverified.
"""

import logging
import os
import shutil
import time
from pathlib import Path
from typing import List, Sequence

from fastapi import UploadFile
from sqlalchemy.orm import Session

from smart_rent.models.user import User

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = {"application/pdf", "image/jpeg", "image/png"}
MAX_DOCUMENTS = 5


class DocumentRejected(ValueError):
    pass


def check_uploads(files: Sequence[UploadFile]) -> None:
    if not files:
        raise DocumentRejected("No documents uploaded")
    if len(files) > MAX_DOCUMENTS:
        raise DocumentRejected(f"At most {MAX_DOCUMENTS} documents per upload")
    for upload in files:
        content_type = (upload.content_type or "").split(";")[0].strip().lower()
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise DocumentRejected(f"Invalid file type for {upload.filename!r}")


def safe_filename(filename: str | None) -> str:
    # Keep only the last path component, whichever separator the client used
    name = os.path.basename((filename or "").replace("\\", "/")).strip()
    if name in ("", ".", ".."):
        return "document"
    return name


def storage_path(upload_dir: Path, filename: str | None) -> Path:
    name = safe_filename(filename)
    stamp = int(time.time() * 1000)
    dest = upload_dir / f"{stamp}-{name}"
    suffix = 1
    while dest.exists():
        dest = upload_dir / f"{stamp}-{suffix}-{name}"
        suffix += 1
    return dest


def store_uploads(files: Sequence[UploadFile], upload_dir: Path) -> List[str]:
    upload_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    try:
        for upload in files:
            dest = storage_path(upload_dir, upload.filename)
            with dest.open("wb") as out:
                shutil.copyfileobj(upload.file, out)
            written.append(dest)
    except OSError:
        for path in written:
            path.unlink(missing_ok=True)
        raise
    return [path.as_posix() for path in written]


def attach_documents(db: Session, user: User, paths: List[str]) -> User:
    user.documents = [*(user.documents or []), *paths]
    user.is_verified = False
    db.commit()
    db.refresh(user)
    logger.info("User %s uploaded %d document(s), awaiting review", user.id, len(paths))
    return user
