"""Core services exports."""

# Database Service
from .database import DbManageService, DbSessionService

# User Services
from .user import UserResourceHandler

__all__ = [
    # Database Service
    "DbManageService",
    "DbSessionService",
    # User Services
    "UserResourceHandler",
]
