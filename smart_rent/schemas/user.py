# File: smart_rent/schemas/user.py

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SignupRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=1)
    role: Literal["user", "landlord"] = "user"


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str
    password: str


class UserPublic(BaseModel):
    name: str
    role: str

    class Config:
        from_attributes = True  # Pydantic v2: replaces orm_mode


class AuthResponse(BaseModel):
    token: str
    user: UserPublic


class DocumentUploadResponse(BaseModel):
    message: str
    files: List[str]
