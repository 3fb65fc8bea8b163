"""
Category Router
Per-trip pin categories (name, color, icon)
"""

from fastapi import APIRouter, Depends, HTTPException

from mappr.db.database import get_categories_collection, get_pins_collection
from mappr.models.common import APIResponse, serialize_doc
from mappr.models.pin import Category, CreateCategoryRequest, UpdateCategoryRequest
from mappr.router.deps import TripAccess, editable_trip, parse_object_id, viewable_trip

router = APIRouter(prefix="/trips/{trip_id}/categories", tags=["Categories"])


async def _get_category(trip_id: str, category_id: str) -> dict:
    category = await get_categories_collection().find_one(
        {"_id": parse_object_id(category_id, "category id"), "trip_id": trip_id}
    )
    if not category:
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")
    return category


@router.get("/", response_model=APIResponse)
async def list_categories(access: TripAccess = Depends(viewable_trip)):
    cursor = get_categories_collection().find({"trip_id": access.trip_id}).sort("created_at", 1)
    categories = await cursor.to_list(length=None)
    return APIResponse(code=0, msg="ok", data=[serialize_doc(c) for c in categories])


@router.post("/", status_code=201, response_model=APIResponse)
async def create_category(body: CreateCategoryRequest, access: TripAccess = Depends(editable_trip)):
    try:
        doc = Category(trip_id=access.trip_id, **body.model_dump()).model_dump()
        res = await get_categories_collection().insert_one(doc)
        doc["_id"] = res.inserted_id
        return APIResponse(code=0, msg="ok", data=serialize_doc(doc))
    except Exception as e:
        print(f"[categories] Error creating category: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to create category: {str(e)}")


@router.patch("/{category_id}", response_model=APIResponse)
async def update_category(
    category_id: str, body: UpdateCategoryRequest, access: TripAccess = Depends(editable_trip)
):
    category = await _get_category(access.trip_id, category_id)
    changes = body.model_dump(exclude_unset=True)
    for required in ("name", "color"):
        if required in changes and changes[required] is None:
            raise HTTPException(status_code=422, detail=f"{required} cannot be null")

    if changes:
        await get_categories_collection().update_one({"_id": category["_id"]}, {"$set": changes})
        category.update(changes)
    return APIResponse(code=0, msg="ok", data=serialize_doc(category))


@router.delete("/{category_id}", response_model=APIResponse)
async def delete_category(category_id: str, access: TripAccess = Depends(editable_trip)):
    """
    Delete a category. Pins that used it become uncategorized.
    """
    category = await _get_category(access.trip_id, category_id)
    try:
        await get_categories_collection().delete_one({"_id": category["_id"]})
        res = await get_pins_collection().update_many(
            {"trip_id": access.trip_id, "category_id": category_id},
            {"$set": {"category_id": None}},
        )
        print(
            f"[categories] Deleted category={category_id} trip={access.trip_id}, "
            f"detached {res.modified_count} pins"
        )
        return APIResponse(code=0, msg="ok", data={"id": category_id, "deleted": True})
    except Exception as e:
        print(f"[categories] Error deleting category={category_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to delete category: {str(e)}")
