"""
Collaborator model: a user's role on a trip
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class Role(str, Enum):
    """
    Ordered access level on a trip: viewer < editor < owner.
    """

    VIEWER = "viewer"
    EDITOR = "editor"
    OWNER = "owner"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def __ge__(self, other):
        if not isinstance(other, Role):
            return NotImplemented
        return self.rank >= other.rank

    def __gt__(self, other):
        if not isinstance(other, Role):
            return NotImplemented
        return self.rank > other.rank

    def __le__(self, other):
        if not isinstance(other, Role):
            return NotImplemented
        return self.rank <= other.rank

    def __lt__(self, other):
        if not isinstance(other, Role):
            return NotImplemented
        return self.rank < other.rank


_ROLE_RANK = {Role.VIEWER: 0, Role.EDITOR: 1, Role.OWNER: 2}


class Collaborator(BaseModel):
    """
    Association between a trip and a user identity
    """

    trip_id: str = Field(..., description="Trip ID")
    user_id: str = Field(..., description="User ID from the auth provider")
    role: Role = Field(default=Role.EDITOR, description="owner, editor or viewer")
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        use_enum_values = True
        json_schema_extra = {
            "example": {
                "trip_id": "6911a4b00ef8e4358798cb05",
                "user_id": "2f1c9a6e-7d1b-4c55-9b1e-0f7e3f3b2a10",
                "role": "editor",
            }
        }


class AddCollaboratorRequest(BaseModel):
    user_id: str
    role: Role = Field(default=Role.EDITOR, description="editor or viewer")


class UpdateCollaboratorRequest(BaseModel):
    role: Role
