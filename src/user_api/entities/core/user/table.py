"""User database table model."""

import sqlalchemy as sa
from sqlmodel import Field

from src.user_api.entities.core._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    ``email`` is stored lower-cased; the unique index is what ultimately
    rejects a duplicate that slips past the request-time check.
    """

    __tablename__ = "users"

    name: str = Field(max_length=255, nullable=False)
    email: str = Field(
        max_length=255,
        nullable=False,
        unique=True,
        index=True,
    )
    password: str = Field(max_length=255, nullable=False)
    age: int | None = Field(default=None, ge=0)
    membership_status: str | None = Field(
        default=None, sa_type=sa.String(16), nullable=True
    )
