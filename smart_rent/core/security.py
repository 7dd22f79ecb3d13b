# File: smart_rent/core/security.py

"""
Security helpers for the Smart Rent API.

Passwords are hashed with bcrypt through passlib, bearer tokens are HS256
JWTs signed with the server secret. A decoded token is handed to endpoints
as an ``Identity``; nothing about the caller is kept between requests.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from smart_rent.core.config import settings


ALGORITHM = settings.algorithm
ACCESS_TOKEN_EXPIRE = timedelta(days=settings.access_token_expire_days)
SECRET_KEY = settings.secret_key

ROLES = ("user", "landlord")

pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidToken(Exception):
    """Raised for any token that cannot be trusted."""


@dataclass(frozen=True)
class Identity:
    user_id: int
    role: str

    @property
    def is_landlord(self) -> bool:
        return self.role == "landlord"


def hash_password(password: str) -> str:
    return pwd_ctx.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_ctx.verify(password, hashed)
    except (ValueError, TypeError):
        return False


def create_access_token(
    user_id: int,
    role: str,
    expires_delta: Optional[timedelta] = None,
    secret_key: Optional[str] = None,
) -> str:
    to_encode: dict[str, Any] = {
        "sub": str(user_id),
        "role": role,
        "exp": datetime.now(timezone.utc) + (ACCESS_TOKEN_EXPIRE if expires_delta is None else expires_delta),
    }
    return jwt.encode(to_encode, secret_key or SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str, secret_key: Optional[str] = None) -> Identity:
    """
    Verify signature and expiry and turn the claims into an Identity.

    Raises InvalidToken for every kind of failure so callers can answer
    them all the same way.
    """
    try:
        payload = jwt.decode(token, secret_key or SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise InvalidToken(str(exc)) from exc

    role = payload.get("role")
    try:
        user_id = int(payload.get("sub") or "")
    except (TypeError, ValueError) as exc:
        raise InvalidToken("Token subject is not a user id") from exc
    if role not in ROLES:
        raise InvalidToken("Token role is not recognised")
    return Identity(user_id=user_id, role=role)
