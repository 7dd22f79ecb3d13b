# File: smart_rent/api/v1/routes_auth.py

"""
Auth API routes: signup and login.

Both return a 7-day bearer token and the public part of the user. Logging
out is done by the client dropping its token.
"""

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from smart_rent.api.deps import DbSession
from smart_rent.schemas.user import AuthResponse, LoginRequest, SignupRequest, UserPublic
from smart_rent.services import auth_service
from smart_rent.services.auth_service import InvalidCredentials, SignupRejected

router = APIRouter()


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
)
def signup(payload: SignupRequest, db: DbSession):
    try:
        user, token = auth_service.signup(db, payload)
    except SignupRejected as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Signup failed",
        )
    return AuthResponse(token=token, user=UserPublic.model_validate(user))


@router.post("/login", response_model=AuthResponse, summary="User login")
def login(payload: LoginRequest, db: DbSession):
    """
    Unknown email and wrong password get the same 401 answer.
    """
    try:
        user, token = auth_service.login(db, email=payload.email, password=payload.password)
    except InvalidCredentials as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc))
    except SQLAlchemyError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed",
        )
    return AuthResponse(token=token, user=UserPublic.model_validate(user))
