"""Entities organized by business concept.

Each entity package colocates its domain model (entity.py), its database
table (table.py) and its data access layer (repository.py).
"""

from .core.user import User, UserRead, UserRepository, UserTable

__all__ = [
    "User",
    "UserRead",
    "UserRepository",
    "UserTable",
]
