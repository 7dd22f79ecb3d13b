# File: smart_rent/services/auth_service.py

"""
Authentication service.

Signup and login for tenants and landlords. The password hash is produced
by normalize_signup() before anything reaches the store, and login answers
an unknown email exactly like a wrong password.
"""

import logging
from typing import Any, Dict, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from smart_rent.core.security import create_access_token, hash_password, verify_password
from smart_rent.models.user import User
from smart_rent.schemas.user import SignupRequest

logger = logging.getLogger(__name__)


class SignupRejected(ValueError):
    pass


class InvalidCredentials(Exception):
    def __init__(self) -> None:
        super().__init__("Invalid credentials")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_signup(payload: SignupRequest) -> Dict[str, Any]:
    """
    Turn a signup request into the column values of a new User.

    The plaintext password stops here: only its bcrypt hash is returned.
    """
    name = payload.name.strip()
    if not name:
        raise SignupRejected("All fields are required")
    return {
        "name": name,
        "email": normalize_email(str(payload.email)),
        "password_hash": hash_password(payload.password),
        "role": payload.role,
        "documents": [],
        "is_verified": False,
    }


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == normalize_email(email)))


def issue_token(user: User) -> str:
    return create_access_token(user.id, user.role)


def signup(db: Session, payload: SignupRequest) -> Tuple[User, str]:
    values = normalize_signup(payload)
    if get_user_by_email(db, values["email"]) is not None:
        raise SignupRejected("User already exists")

    user = User(**values)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise SignupRejected("User already exists") from exc
    db.refresh(user)
    logger.info("Signed up %s as %s", user.email, user.role)
    return user, issue_token(user)


def authenticate_user(db: Session, *, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login for %s", normalize_email(email))
        raise InvalidCredentials()
    return user


def login(db: Session, *, email: str, password: str) -> Tuple[User, str]:
    user = authenticate_user(db, email=email, password=password)
    logger.info("Logged in %s", user.email)
    return user, issue_token(user)
