# File: smart_rent/core/logging_config.py

import logging
import sys
from urllib.parse import urlsplit, urlunsplit

from smart_rent.core.config import DEFAULT_SECRET_KEY, settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def mask_db_uri(uri: str) -> str:
    """Hide the password part of a database URL before it is logged."""
    try:
        parts = urlsplit(uri)
        if not parts.password:
            return uri
        host_port = parts.hostname or ""
        if parts.port:
            host_port = f"{host_port}:{parts.port}"
        netloc = f"{parts.username}:****@{host_port}"
        return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))
    except ValueError:
        return uri


def setup_logging() -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("passlib.handlers.bcrypt").setLevel(logging.ERROR)

    logger = logging.getLogger(__name__)
    logger.info("DATABASE_URL in use: %s", mask_db_uri(settings.database_url))
    if settings.secret_key == DEFAULT_SECRET_KEY:
        logger.warning("JWT_SECRET is not set; tokens are signed with the development default")
