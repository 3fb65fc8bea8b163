"""
Trip Router
Handles trip creation, listing, editing and the day-by-day timeline
"""

from datetime import datetime

from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException

from mappr.core.timeline import build_timeline, to_calendar_date
from mappr.db.database import (
    get_categories_collection,
    get_collaborators_collection,
    get_list_items_collection,
    get_pins_collection,
    get_trips_collection,
)
from mappr.models.collaborator import Collaborator, Role
from mappr.models.common import APIResponse, serialize_doc
from mappr.models.trip import CreateTripRequest, Trip, UpdateTripRequest
from mappr.router.auth import get_current_user_id
from mappr.router.deps import (
    TripAccess,
    editable_trip,
    managed_trip,
    viewable_trip,
)

router = APIRouter(prefix="/trips", tags=["Trips"])


def _trip_payload(access: TripAccess) -> dict:
    return {
        **serialize_doc(access.trip),
        "role": access.role,
        "can_edit": access.can_edit,
    }


@router.get("/", response_model=APIResponse)
async def list_trips(user_id: str = Depends(get_current_user_id)):
    """
    Trips the user created or collaborates on, newest first.
    """
    try:
        memberships = await get_collaborators_collection().find({"user_id": user_id}).to_list(
            length=None
        )
        role_by_trip = {m["trip_id"]: m.get("role") for m in memberships}

        member_ids = [ObjectId(tid) for tid in role_by_trip if ObjectId.is_valid(tid)]
        cursor = get_trips_collection().find(
            {"$or": [{"created_by": user_id}, {"_id": {"$in": member_ids}}]}
        ).sort("created_at", -1)
        trips = await cursor.to_list(length=None)

        result = []
        for doc in trips:
            trip_id = str(doc["_id"])
            role = Role.OWNER.value if doc.get("created_by") == user_id else role_by_trip.get(trip_id)
            result.append({**serialize_doc(doc), "role": role})

        return APIResponse(code=0, msg="ok", data=result)

    except Exception as e:
        print(f"[trips] Error listing trips for user={user_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve trips: {str(e)}")


@router.post("/", status_code=201, response_model=APIResponse)
async def create_trip(body: CreateTripRequest, user_id: str = Depends(get_current_user_id)):
    """
    Create a trip and register its creator as owner.
    """
    try:
        trip_doc = Trip(created_by=user_id, **body.model_dump())
        doc = trip_doc.model_dump()
        res = await get_trips_collection().insert_one(doc)
        trip_id = str(res.inserted_id)

        owner = Collaborator(trip_id=trip_id, user_id=user_id, role=Role.OWNER)
        await get_collaborators_collection().insert_one(owner.model_dump())

        print(f"[trips] Created trip={trip_id} name={trip_doc.name!r} by user={user_id}")
        doc["_id"] = res.inserted_id
        return APIResponse(
            code=0, msg="ok", data={**serialize_doc(doc), "role": Role.OWNER.value}
        )

    except Exception as e:
        print(f"[trips] Error creating trip: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to create trip: {str(e)}")


@router.get("/{trip_id}", response_model=APIResponse)
async def get_trip(access: TripAccess = Depends(viewable_trip)):
    return APIResponse(code=0, msg="ok", data=_trip_payload(access))


@router.patch("/{trip_id}", response_model=APIResponse)
async def update_trip(body: UpdateTripRequest, access: TripAccess = Depends(editable_trip)):
    """
    Update trip details. The resulting date range must not be inverted.
    """
    changes = body.model_dump(exclude_unset=True)
    if "name" in changes and not changes["name"]:
        raise HTTPException(status_code=422, detail="Trip name cannot be empty")

    start = to_calendar_date(changes.get("start_date", access.trip.get("start_date")))
    end = to_calendar_date(changes.get("end_date", access.trip.get("end_date")))
    if start and end and end < start:
        raise HTTPException(status_code=422, detail="end_date must not be before start_date")

    try:
        changes["updated_at"] = datetime.utcnow()
        await get_trips_collection().update_one({"_id": access.trip["_id"]}, {"$set": changes})
        access.trip.update(changes)
        print(f"[trips] Updated trip={access.trip_id} fields={sorted(changes)}")
        return APIResponse(code=0, msg="ok", data=_trip_payload(access))

    except Exception as e:
        print(f"[trips] Error updating trip={access.trip_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to update trip: {str(e)}")


@router.delete("/{trip_id}", response_model=APIResponse)
async def delete_trip(access: TripAccess = Depends(managed_trip)):
    """
    Delete a trip together with its pins, categories, lists and collaborators.
    """
    trip_id = access.trip_id
    try:
        await get_pins_collection().delete_many({"trip_id": trip_id})
        await get_categories_collection().delete_many({"trip_id": trip_id})
        await get_list_items_collection().delete_many({"trip_id": trip_id})
        await get_collaborators_collection().delete_many({"trip_id": trip_id})
        await get_trips_collection().delete_one({"_id": access.trip["_id"]})

        print(f"[trips] Deleted trip={trip_id} by user={access.user_id}")
        return APIResponse(code=0, msg="ok", data={"id": trip_id, "deleted": True})

    except Exception as e:
        print(f"[trips] Error deleting trip={trip_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to delete trip: {str(e)}")


@router.get("/{trip_id}/timeline", response_model=APIResponse)
async def get_trip_timeline(access: TripAccess = Depends(viewable_trip)):
    """
    Day-by-day itinerary: trip-days with their pins ordered by time,
    plus unscheduled pins and pins on days outside the trip's range.
    """
    try:
        pins = await get_pins_collection().find({"trip_id": access.trip_id}).sort(
            "created_at", -1
        ).to_list(length=None)

        timeline = build_timeline(access.trip, [serialize_doc(p) for p in pins])
        return APIResponse(code=0, msg="ok", data=timeline)

    except Exception as e:
        print(f"[trips] Error building timeline for trip={access.trip_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to build timeline: {str(e)}")
