"""User domain entity."""

from typing import Literal, get_args

from pydantic import Field

from src.user_api.entities.core._base import Entity

MembershipStatus = Literal["free", "premium", "vip"]
MEMBERSHIP_STATUSES: tuple[str, ...] = get_args(MembershipStatus)


class UserRead(Entity):
    """Public view of a user. Never carries the password hash."""

    name: str = Field(description="User's display name", max_length=255)
    email: str = Field(description="User's email address", max_length=255)
    age: int | None = Field(default=None, ge=0, description="User's age in years")
    membership_status: MembershipStatus | None = Field(
        default=None, description="Membership tier"
    )


class User(UserRead):
    """User entity representing an account in the system.

    The stored ``password`` is always the one-way hash produced by
    ``src.user_api.core.security.hash_password``.
    """

    password: str = Field(description="Hashed password", repr=False)

    def to_read(self) -> UserRead:
        """Drop the password hash for anything leaving the service."""
        return UserRead.model_validate(self.model_dump(exclude={"password"}))
