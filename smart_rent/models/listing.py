# File: smart_rent/models/listing.py

"""
Listing model.

One rental offer. Rents are monthly amounts in euros: rent_cold is the base
rent, rent_warm includes utilities when the source states it.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from smart_rent.models.base import Base


class Listing(Base):
    __tablename__ = "listings"
    __table_args__ = (
        Index("ix_listings_filters", "city", "district", "rent_cold", "size_m2"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    district: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    address: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    size_m2: Mapped[float] = mapped_column(Float, nullable=False)
    rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    furnished: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    rent_cold: Mapped[float] = mapped_column(Float, nullable=False)
    rent_warm: Mapped[float | None] = mapped_column(Float, nullable=True)

    # manual, csv or scrape
    source: Mapped[str] = mapped_column(String(16), nullable=False, default="manual")
    # Unique when set, so re-importing the same file skips known offers
    url: Mapped[str | None] = mapped_column(Text, nullable=True, unique=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
