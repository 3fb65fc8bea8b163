"""
Trip list items (stores, things to do, things to see)
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ListType(str, Enum):
    STORES = "stores"
    THINGS_TO_DO = "things_to_do"
    THINGS_TO_SEE = "things_to_see"


class ListItem(BaseModel):
    trip_id: str
    list_type: ListType
    name: str = Field(..., min_length=1)
    description: str | None = None
    pin_id: str | None = Field(None, description="Optional linked pin")
    completed: bool = False
    created_by: str

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        use_enum_values = True


class CreateListItemRequest(BaseModel):
    list_type: ListType
    name: str = Field(..., min_length=1)
    description: str | None = None
    pin_id: str | None = None


class UpdateListItemRequest(BaseModel):
    name: str | None = Field(None, min_length=1)
    description: str | None = None
    pin_id: str | None = None
    completed: bool | None = None
