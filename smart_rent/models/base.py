# File: smart_rent/models/base.py

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models (Listing, User).
    """
    pass
