# File: smart_rent/core/config.py

import os
from functools import lru_cache
from typing import List

from pydantic import BaseModel, Field, field_validator


DEFAULT_SECRET_KEY = "your_jwt_secret_here"


class Settings(BaseModel):
    # Basic app info
    PROJECT_NAME: str = "Smart Rent API"
    VERSION: str = "0.1.0"

    api_prefix: str = "/api"
    port: int = int(os.getenv("PORT", "4000"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS: the browser origin(s) allowed to call the API
    client_url: List[str] = Field(
        default=os.getenv("CLIENT_URL", "http://localhost:5173"),
        validate_default=True,
    )

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./smart_rent.db")

    # Uploaded verification documents
    upload_dir: str = os.getenv("UPLOAD_DIR", "uploads")

    # Security / auth
    secret_key: str = os.getenv("JWT_SECRET", DEFAULT_SECRET_KEY)
    access_token_expire_days: int = 7
    algorithm: str = "HS256"

    @field_validator("client_url", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
