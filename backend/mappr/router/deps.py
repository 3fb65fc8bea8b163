"""
Shared lookups for the trip-scoped routers
"""

from dataclasses import dataclass

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Depends, HTTPException

from mappr.core.permissions import can_edit, can_manage_collaborators, can_view, effective_role
from mappr.db.database import get_collaborators_collection, get_trips_collection
from mappr.router.auth import get_current_user_id


def parse_object_id(value: str, what: str = "id") -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise HTTPException(status_code=400, detail=f"Invalid {what}: {value}")


@dataclass
class TripAccess:
    """Snapshot of a trip and the caller's collaborator record on it."""

    trip: dict
    collaborator: dict | None
    user_id: str

    @property
    def trip_id(self) -> str:
        return str(self.trip["_id"])

    @property
    def can_view(self) -> bool:
        return can_view(self.trip, self.collaborator, self.user_id)

    @property
    def can_edit(self) -> bool:
        return can_edit(self.trip, self.user_id, self.collaborator)

    @property
    def can_manage_collaborators(self) -> bool:
        return can_manage_collaborators(self.trip, self.user_id, self.collaborator)

    @property
    def role(self) -> str | None:
        role = effective_role(self.trip, self.user_id, self.collaborator)
        return role.value if role else None


async def load_trip_access(trip_id: str, user_id: str) -> TripAccess:
    """
    Fetch the trip and the caller's collaborator row.
    404 for an unknown trip, 403 when the caller may not even view it.
    """
    oid = parse_object_id(trip_id, "trip id")
    trip = await get_trips_collection().find_one({"_id": oid})
    if not trip:
        raise HTTPException(status_code=404, detail=f"Trip {trip_id} not found")

    collaborator = await get_collaborators_collection().find_one(
        {"trip_id": trip_id, "user_id": user_id}
    )
    access = TripAccess(trip=trip, collaborator=collaborator, user_id=user_id)
    if not access.can_view:
        raise HTTPException(status_code=403, detail="You do not have access to this trip")
    return access


async def viewable_trip(trip_id: str, user_id: str = Depends(get_current_user_id)) -> TripAccess:
    return await load_trip_access(trip_id, user_id)


async def editable_trip(trip_id: str, user_id: str = Depends(get_current_user_id)) -> TripAccess:
    access = await load_trip_access(trip_id, user_id)
    if not access.can_edit:
        raise HTTPException(status_code=403, detail="You do not have permission to edit this trip")
    return access


async def managed_trip(trip_id: str, user_id: str = Depends(get_current_user_id)) -> TripAccess:
    access = await load_trip_access(trip_id, user_id)
    if not access.can_manage_collaborators:
        raise HTTPException(status_code=403, detail="Only the trip owner can manage collaborators")
    return access
