"""
List Router
Per-trip checklists: stores, things to do, things to see
"""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

from mappr.db.database import get_list_items_collection, get_pins_collection
from mappr.models.common import APIResponse, serialize_doc
from mappr.models.list_item import CreateListItemRequest, ListItem, ListType, UpdateListItemRequest
from mappr.router.deps import TripAccess, editable_trip, parse_object_id, viewable_trip

router = APIRouter(prefix="/trips/{trip_id}/lists", tags=["Lists"])


async def _ensure_pin(trip_id: str, pin_id: str | None) -> None:
    if not pin_id:
        return
    pin = await get_pins_collection().find_one(
        {"_id": parse_object_id(pin_id, "pin id"), "trip_id": trip_id}
    )
    if not pin:
        raise HTTPException(status_code=404, detail=f"Pin {pin_id} not found")


async def _get_item(trip_id: str, item_id: str) -> dict:
    item = await get_list_items_collection().find_one(
        {"_id": parse_object_id(item_id, "list item id"), "trip_id": trip_id}
    )
    if not item:
        raise HTTPException(status_code=404, detail=f"List item {item_id} not found")
    return item


@router.get("/", response_model=APIResponse)
async def get_lists(access: TripAccess = Depends(viewable_trip)):
    """
    All list items grouped by list type, newest first within each list.
    """
    cursor = get_list_items_collection().find({"trip_id": access.trip_id}).sort("created_at", -1)
    items = await cursor.to_list(length=None)

    grouped: dict[str, list[dict]] = {t.value: [] for t in ListType}
    for item in items:
        grouped.setdefault(item.get("list_type"), []).append(serialize_doc(item))
    return APIResponse(code=0, msg="ok", data=grouped)


@router.post("/", status_code=201, response_model=APIResponse)
async def create_list_item(body: CreateListItemRequest, access: TripAccess = Depends(editable_trip)):
    await _ensure_pin(access.trip_id, body.pin_id)
    try:
        doc = ListItem(
            trip_id=access.trip_id, created_by=access.user_id, **body.model_dump()
        ).model_dump()
        res = await get_list_items_collection().insert_one(doc)
        doc["_id"] = res.inserted_id
        return APIResponse(code=0, msg="ok", data=serialize_doc(doc))
    except Exception as e:
        print(f"[lists] Error creating list item: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to create list item: {str(e)}")


@router.patch("/{item_id}", response_model=APIResponse)
async def update_list_item(
    item_id: str, body: UpdateListItemRequest, access: TripAccess = Depends(editable_trip)
):
    """
    Rename, relink or tick off a list item.
    """
    item = await _get_item(access.trip_id, item_id)
    changes = body.model_dump(exclude_unset=True)
    if "name" in changes and not changes["name"]:
        raise HTTPException(status_code=422, detail="name cannot be empty")
    if "completed" in changes and changes["completed"] is None:
        raise HTTPException(status_code=422, detail="completed cannot be null")
    if "pin_id" in changes:
        await _ensure_pin(access.trip_id, changes["pin_id"])

    changes["updated_at"] = datetime.utcnow()
    await get_list_items_collection().update_one({"_id": item["_id"]}, {"$set": changes})
    item.update(changes)
    return APIResponse(code=0, msg="ok", data=serialize_doc(item))


@router.delete("/{item_id}", response_model=APIResponse)
async def delete_list_item(item_id: str, access: TripAccess = Depends(editable_trip)):
    item = await _get_item(access.trip_id, item_id)
    await get_list_items_collection().delete_one({"_id": item["_id"]})
    return APIResponse(code=0, msg="ok", data={"id": item_id, "deleted": True})
