"""
Models package for database schemas
"""

from mappr.models.collaborator import Collaborator, Role
from mappr.models.list_item import ListItem, ListType
from mappr.models.pin import Category, Pin
from mappr.models.trip import Trip

__all__ = ["Trip", "Pin", "Category", "Collaborator", "Role", "ListItem", "ListType"]
