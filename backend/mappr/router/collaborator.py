"""
Collaborator Router
Sharing a trip: who can view it and who can edit it
"""

from fastapi import APIRouter, Depends, HTTPException
from pymongo.errors import DuplicateKeyError

from mappr.db.database import get_collaborators_collection
from mappr.models.collaborator import (
    AddCollaboratorRequest,
    Collaborator,
    Role,
    UpdateCollaboratorRequest,
)
from mappr.models.common import APIResponse, serialize_doc
from mappr.router.deps import TripAccess, managed_trip, viewable_trip

router = APIRouter(prefix="/trips/{trip_id}/collaborators", tags=["Collaborators"])


async def _get_collaborator(trip_id: str, user_id: str) -> dict:
    record = await get_collaborators_collection().find_one({"trip_id": trip_id, "user_id": user_id})
    if not record:
        raise HTTPException(status_code=404, detail=f"User {user_id} is not a collaborator")
    return record


def _guard_creator(access: TripAccess, user_id: str) -> None:
    if user_id == access.trip.get("created_by"):
        raise HTTPException(status_code=400, detail="The trip creator always remains owner")


@router.get("/", response_model=APIResponse)
async def list_collaborators(access: TripAccess = Depends(viewable_trip)):
    cursor = get_collaborators_collection().find({"trip_id": access.trip_id}).sort("created_at", 1)
    records = await cursor.to_list(length=None)
    return APIResponse(code=0, msg="ok", data=[serialize_doc(r) for r in records])


@router.post("/", status_code=201, response_model=APIResponse)
async def add_collaborator(body: AddCollaboratorRequest, access: TripAccess = Depends(managed_trip)):
    """
    Share the trip with another user as editor or viewer.
    """
    if body.role == Role.OWNER:
        raise HTTPException(status_code=400, detail="Collaborators can be added as editor or viewer")
    _guard_creator(access, body.user_id)

    doc = Collaborator(trip_id=access.trip_id, user_id=body.user_id, role=body.role).model_dump()
    try:
        res = await get_collaborators_collection().insert_one(doc)
    except DuplicateKeyError:
        raise HTTPException(status_code=409, detail=f"User {body.user_id} already has access")

    doc["_id"] = res.inserted_id
    print(f"[collaborators] trip={access.trip_id} added user={body.user_id} as {doc['role']}")
    return APIResponse(code=0, msg="ok", data=serialize_doc(doc))


@router.patch("/{user_id}", response_model=APIResponse)
async def update_collaborator(
    user_id: str, body: UpdateCollaboratorRequest, access: TripAccess = Depends(managed_trip)
):
    if body.role == Role.OWNER:
        raise HTTPException(status_code=400, detail="Collaborators can be editor or viewer")
    _guard_creator(access, user_id)
    record = await _get_collaborator(access.trip_id, user_id)

    await get_collaborators_collection().update_one(
        {"_id": record["_id"]}, {"$set": {"role": body.role.value}}
    )
    record["role"] = body.role.value
    print(f"[collaborators] trip={access.trip_id} user={user_id} role -> {body.role.value}")
    return APIResponse(code=0, msg="ok", data=serialize_doc(record))


@router.delete("/{user_id}", response_model=APIResponse)
async def remove_collaborator(user_id: str, access: TripAccess = Depends(managed_trip)):
    _guard_creator(access, user_id)
    record = await _get_collaborator(access.trip_id, user_id)

    await get_collaborators_collection().delete_one({"_id": record["_id"]})
    print(f"[collaborators] trip={access.trip_id} removed user={user_id}")
    return APIResponse(code=0, msg="ok", data={"user_id": user_id, "deleted": True})
