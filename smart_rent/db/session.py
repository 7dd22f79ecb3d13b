from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from smart_rent.core.config import settings

SQLALCHEMY_DATABASE_URL = settings.database_url

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
)

# One session per request, see smart_rent.api.deps.get_db
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
