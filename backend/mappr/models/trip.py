"""
Trip model for collaborative trip planning
"""

from datetime import date, datetime

from pydantic import BaseModel, Field, field_serializer, model_validator


def _check_date_order(start_date: date | None, end_date: date | None) -> None:
    if start_date and end_date and end_date < start_date:
        raise ValueError("end_date must not be before start_date")


class Trip(BaseModel):
    """
    Trip document as stored by the storage collaborator
    """

    name: str = Field(..., min_length=1, description="Trip name")
    description: str | None = Field(None, description="Optional trip description")
    start_date: date | None = Field(None, description="First calendar day of the trip")
    end_date: date | None = Field(None, description="Last calendar day of the trip")
    label: str | None = Field(None, description="Optional label/category tag")
    created_by: str = Field(..., description="User ID of trip creator")

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @field_serializer("start_date", "end_date")
    def _serialize_date(self, value: date | None) -> str | None:
        # BSON has no date-only type
        return value.isoformat() if value else None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Summer Japan Trip",
                "description": "Two weeks in Kansai",
                "start_date": "2025-07-01",
                "end_date": "2025-07-14",
                "label": "vacation",
                "created_by": "2f1c9a6e-7d1b-4c55-9b1e-0f7e3f3b2a10",
            }
        }


class CreateTripRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    label: str | None = None

    @model_validator(mode="after")
    def _validate_dates(self):
        _check_date_order(self.start_date, self.end_date)
        return self


class UpdateTripRequest(BaseModel):
    """Partial update; only fields that were sent are applied."""

    name: str | None = Field(None, min_length=1)
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    label: str | None = None

    @model_validator(mode="after")
    def _validate_dates(self):
        _check_date_order(self.start_date, self.end_date)
        return self

    @field_serializer("start_date", "end_date")
    def _serialize_date(self, value: date | None) -> str | None:
        return value.isoformat() if value else None
