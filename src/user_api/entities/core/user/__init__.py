"""User entity module.

This module contains all User-related classes organized by responsibility:
- User / UserRead: Domain entity and its public view
- UserTable: Database persistence model
- UserRepository: Data access layer returning explicit StoreResult values
"""

from .entity import MEMBERSHIP_STATUSES, MembershipStatus, User, UserRead
from .repository import StoreResult, StoreStatus, UserPageSlice, UserRepository
from .table import UserTable

__all__ = [
    "MEMBERSHIP_STATUSES",
    "MembershipStatus",
    "StoreResult",
    "StoreStatus",
    "User",
    "UserPageSlice",
    "UserRead",
    "UserRepository",
    "UserTable",
]
