"""
Pydantic schemas for validating caller-supplied records.
"""

from .user import UserCreate
from .property import PropertyCreate, PropertySearchOptions

__all__ = [
    "UserCreate",
    "PropertyCreate",
    "PropertySearchOptions",
]
