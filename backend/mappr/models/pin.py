"""
Pin and Category models
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class Pin(BaseModel):
    """
    A geo-located point of interest attached to a trip.
    `place_data` is an opaque bag of upstream place fields (rating, address, hours...).
    """

    trip_id: str = Field(..., description="Owning trip ID")
    name: str = Field(..., min_length=1)
    description: str | None = None
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    category_id: str | None = Field(None, description="Optional category reference")
    day: int | None = Field(None, ge=1, description="1-based trip day")
    time: str | None = Field(None, pattern=TIME_PATTERN, description="HH:MM 24-hour")
    place_id: str | None = Field(None, description="External place reference")
    place_data: dict[str, Any] | None = Field(None, description="Cached upstream place metadata")
    created_by: str = Field(..., description="User ID of pin creator")

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "trip_id": "6911a4b00ef8e4358798cb05",
                "name": "Fushimi Inari",
                "latitude": 34.9671,
                "longitude": 135.7727,
                "day": 2,
                "time": "08:30",
                "created_by": "2f1c9a6e-7d1b-4c55-9b1e-0f7e3f3b2a10",
            }
        }


class CreatePinRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    category_id: str | None = None
    day: int | None = Field(None, ge=1)
    time: str | None = Field(None, pattern=TIME_PATTERN)
    place_id: str | None = None
    place_data: dict[str, Any] | None = None

    @field_validator("time", mode="before")
    @classmethod
    def _blank_time(cls, v):
        return v or None


class UpdatePinRequest(BaseModel):
    name: str | None = Field(None, min_length=1)
    description: str | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    category_id: str | None = None
    day: int | None = Field(None, ge=1)
    time: str | None = Field(None, pattern=TIME_PATTERN)
    place_id: str | None = None
    place_data: dict[str, Any] | None = None

    @field_validator("time", mode="before")
    @classmethod
    def _blank_time(cls, v):
        return v or None


class Category(BaseModel):
    trip_id: str
    name: str = Field(..., min_length=1)
    color: str = Field(..., description="Display color, e.g. #ef4444")
    icon: str | None = Field(None, description="Optional icon identifier")
    created_at: datetime = Field(default_factory=datetime.utcnow)


class CreateCategoryRequest(BaseModel):
    name: str = Field(..., min_length=1)
    color: str = "#ef4444"
    icon: str | None = None


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, min_length=1)
    color: str | None = None
    icon: str | None = None
