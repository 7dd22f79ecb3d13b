# smart_rent/main.py

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from smart_rent.api.errors import register_error_handlers
from smart_rent.api.v1.api import api_router
from smart_rent.core.config import settings
from smart_rent.core.logging_config import setup_logging
from smart_rent.db.init_db import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("%s %s ready", settings.PROJECT_NAME, settings.VERSION)
    yield


def create_application() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # ---------- CORS ----------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.client_url,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- ERRORS ----------
    register_error_handlers(app)

    # ---------- STATIC FILES ----------
    # Uploaded verification documents, /uploads/<millis>-<name>
    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")

    # ---------- ROUTERS ----------
    app.include_router(api_router, prefix=settings.api_prefix)

    return app


app = create_application()
