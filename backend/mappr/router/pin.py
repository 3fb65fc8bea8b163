"""
Pin Router
Map pins for a trip; mutations require editor rights
"""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from mappr.db.database import get_categories_collection, get_list_items_collection, get_pins_collection
from mappr.models.common import APIResponse, serialize_doc
from mappr.models.pin import CreatePinRequest, Pin, UpdatePinRequest
from mappr.router.deps import TripAccess, editable_trip, parse_object_id, viewable_trip

router = APIRouter(prefix="/trips/{trip_id}/pins", tags=["Pins"])


async def _ensure_category(trip_id: str, category_id: str | None) -> None:
    if not category_id:
        return
    category = await get_categories_collection().find_one(
        {"_id": parse_object_id(category_id, "category id"), "trip_id": trip_id}
    )
    if not category:
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")


async def _get_pin(trip_id: str, pin_id: str) -> dict:
    pin = await get_pins_collection().find_one(
        {"_id": parse_object_id(pin_id, "pin id"), "trip_id": trip_id}
    )
    if not pin:
        raise HTTPException(status_code=404, detail=f"Pin {pin_id} not found")
    return pin


@router.get("/", response_model=APIResponse)
async def list_pins(access: TripAccess = Depends(viewable_trip)):
    """
    All pins on the trip, newest first.
    """
    try:
        cursor = get_pins_collection().find({"trip_id": access.trip_id}).sort("created_at", -1)
        pins = await cursor.to_list(length=None)
        return APIResponse(code=0, msg="ok", data=[serialize_doc(p) for p in pins])
    except Exception as e:
        print(f"[pins] Error fetching pins for trip={access.trip_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve pins: {str(e)}")


@router.post("/", status_code=201, response_model=APIResponse)
async def create_pin(body: CreatePinRequest, access: TripAccess = Depends(editable_trip)):
    await _ensure_category(access.trip_id, body.category_id)

    fields = body.model_dump()
    if fields.get("day") is None:
        # A time only means something on a scheduled day
        fields["time"] = None

    try:
        pin_doc = Pin(trip_id=access.trip_id, created_by=access.user_id, **fields)
        doc = pin_doc.model_dump()
        res = await get_pins_collection().insert_one(doc)
        doc["_id"] = res.inserted_id

        print(f"[pins] Created pin={res.inserted_id} trip={access.trip_id} day={pin_doc.day}")
        return APIResponse(code=0, msg="ok", data=serialize_doc(doc))
    except Exception as e:
        print(f"[pins] Error creating pin: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to create pin: {str(e)}")


@router.get("/{pin_id}", response_model=APIResponse)
async def get_pin(pin_id: str, access: TripAccess = Depends(viewable_trip)):
    pin = await _get_pin(access.trip_id, pin_id)
    return APIResponse(code=0, msg="ok", data=serialize_doc(pin))


@router.patch("/{pin_id}", response_model=APIResponse)
async def update_pin(
    pin_id: str, body: UpdatePinRequest, access: TripAccess = Depends(editable_trip)
):
    """
    Partial update. Clearing the day also clears the time.
    """
    pin = await _get_pin(access.trip_id, pin_id)
    changes = body.model_dump(exclude_unset=True)

    for required in ("name", "latitude", "longitude"):
        if required in changes and changes[required] is None:
            raise HTTPException(status_code=422, detail=f"{required} cannot be null")

    if "category_id" in changes:
        await _ensure_category(access.trip_id, changes["category_id"])

    day = changes.get("day", pin.get("day"))
    if day is None:
        if changes.get("time"):
            raise HTTPException(status_code=422, detail="A time can only be set on a scheduled day")
        if pin.get("time") is not None or "time" in changes:
            changes["time"] = None

    try:
        changes["updated_at"] = datetime.utcnow()
        await get_pins_collection().update_one({"_id": pin["_id"]}, {"$set": changes})
        pin.update(changes)
        return APIResponse(code=0, msg="ok", data=serialize_doc(pin))
    except Exception as e:
        print(f"[pins] Error updating pin={pin_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to update pin: {str(e)}")


@router.delete("/{pin_id}", response_model=APIResponse)
async def delete_pin(pin_id: str, access: TripAccess = Depends(editable_trip)):
    """
    Delete a pin; list items linked to it are kept but unlinked.
    """
    pin = await _get_pin(access.trip_id, pin_id)
    try:
        await get_pins_collection().delete_one({"_id": pin["_id"]})
        await get_list_items_collection().update_many(
            {"trip_id": access.trip_id, "pin_id": pin_id}, {"$set": {"pin_id": None}}
        )
        print(f"[pins] Deleted pin={pin_id} trip={access.trip_id}")
        return APIResponse(code=0, msg="ok", data={"id": pin_id, "deleted": True})
    except Exception as e:
        print(f"[pins] Error deleting pin={pin_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to delete pin: {str(e)}")
