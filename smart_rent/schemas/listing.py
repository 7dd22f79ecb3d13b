# File: smart_rent/schemas/listing.py

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


REQUIRED_FIELDS = ("title", "city", "size_m2", "rent_cold")
OPTIONAL_FIELDS = ("district", "address", "rooms", "furnished", "rent_warm", "source", "url")
LISTING_FIELDS = REQUIRED_FIELDS + OPTIONAL_FIELDS

ListingSource = Literal["manual", "csv", "scrape"]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


# -----------------------------
# Write side
# -----------------------------

class ListingCreate(BaseModel):
    """
    One listing as submitted by a landlord or read from a CSV row.

    Numeric strings are coerced, and blank optional values count as absent
    so the defaults apply.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=120)
    district: str = ""
    address: str = ""

    size_m2: float = Field(ge=5, allow_inf_nan=False)
    rooms: int = Field(default=1, ge=0)
    furnished: bool = False

    rent_cold: float = Field(ge=0, allow_inf_nan=False)
    rent_warm: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

    source: ListingSource = "manual"
    url: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def drop_blank_optionals(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if not (key in OPTIONAL_FIELDS and _is_blank(value))
            }
        return data

    @field_validator("size_m2", "rooms", "rent_cold", "rent_warm", mode="before")
    @classmethod
    def reject_booleans(cls, value: Any) -> Any:
        # true would otherwise be read as 1
        if isinstance(value, bool):
            raise ValueError("must be a number, not a boolean")
        return value


# -----------------------------
# Read side
# -----------------------------

class ListingRead(BaseModel):
    id: int
    title: str
    city: str
    district: str
    address: str
    size_m2: float
    rooms: int
    furnished: bool
    rent_cold: float
    rent_warm: Optional[float] = None
    source: str
    url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ListingFilter(BaseModel):
    """Query-string filters for the listing search. All bounds are inclusive."""

    city: Optional[str] = None
    min_rent: Optional[float] = Field(default=None, allow_inf_nan=False)
    max_rent: Optional[float] = Field(default=None, allow_inf_nan=False)
    min_size: Optional[float] = Field(default=None, allow_inf_nan=False)
    max_size: Optional[float] = Field(default=None, allow_inf_nan=False)
    furnished: Optional[bool] = None
    q: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def drop_blank_values(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if not _is_blank(value)}
        return data


class BulkInsertResult(BaseModel):
    inserted: int


class DeleteListingResponse(BaseModel):
    message: str
    id: int
