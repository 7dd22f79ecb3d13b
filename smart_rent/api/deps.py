# File: smart_rent/api/deps.py

from collections.abc import Generator
from pathlib import Path
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from smart_rent.core.config import settings
from smart_rent.core.security import Identity, InvalidToken, decode_access_token
from smart_rent.db.session import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_upload_dir() -> Path:
    return Path(settings.upload_dir)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or missing token",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_identity(authorization: Annotated[str | None, Header()] = None) -> Identity:
    """
    Resolve the caller from the Authorization header.

    Any token problem gets the same 401, whatever the cause.
    """
    token = _bearer_token(authorization)
    if not token:
        raise _unauthorized()
    try:
        return decode_access_token(token)
    except InvalidToken:
        raise _unauthorized()


def require_landlord(identity: Annotated[Identity, Depends(get_identity)]) -> Identity:
    if not identity.is_landlord:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Landlord access required.",
        )
    return identity


DbSession = Annotated[Session, Depends(get_db)]
Landlord = Annotated[Identity, Depends(require_landlord)]
