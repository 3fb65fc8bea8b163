"""
Trip permission checks

Stateless predicates evaluated on the latest trip + collaborator snapshot.
They gate which mutations the API attempts; the storage backend keeps its
own access rules.
"""

from __future__ import annotations

from typing import Any, Mapping

from mappr.models.collaborator import Role


def _field(record: Any, name: str) -> Any:
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _role_of(collaborator: Any) -> Role | None:
    raw = _field(collaborator, "role")
    if raw is None:
        return None
    try:
        return Role(raw)
    except ValueError:
        # Unknown role grants nothing
        return None


def _is_creator(trip: Any, user_id: str | None) -> bool:
    return user_id is not None and user_id == _field(trip, "created_by")


def can_view(trip: Any, collaborator: Any, user_id: str | None = None) -> bool:
    """Any collaborator record, or being the trip's creator, allows viewing."""
    if collaborator is not None:
        return True
    return _is_creator(trip, user_id)


def can_edit(trip: Any, user_id: str | None, collaborator: Any) -> bool:
    """Creator always edits; otherwise the role must be at least editor."""
    if _is_creator(trip, user_id):
        return True
    role = _role_of(collaborator)
    return role is not None and role >= Role.EDITOR


def can_manage_collaborators(trip: Any, user_id: str | None, collaborator: Any) -> bool:
    """Only the creator or an owner may share the trip or change roles."""
    if _is_creator(trip, user_id):
        return True
    role = _role_of(collaborator)
    return role is not None and role >= Role.OWNER


def effective_role(trip: Any, user_id: str | None, collaborator: Any) -> Role | None:
    if _is_creator(trip, user_id):
        return Role.OWNER
    return _role_of(collaborator)
