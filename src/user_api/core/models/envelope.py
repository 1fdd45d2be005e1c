"""Response payload models shared by the user resource and the HTTP layer."""

from typing import Any

from pydantic import BaseModel, Field

from src.user_api.entities.core.user import UserRead


class Envelope(BaseModel):
    """JSON wrapper used for every non-list response.

    Optional keys that were never set are left out of the serialized body,
    so a 404 carries only ``success`` and ``message``.
    """

    success: bool
    message: str
    data: Any | None = None
    error: str | None = None
    errors: dict[str, list[str]] | None = None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class UserPage(BaseModel):
    """A bounded slice of the user collection with pagination metadata."""

    items: list[UserRead] = Field(default_factory=list)
    total: int = Field(ge=0)
    page: int = Field(ge=1)
    page_size: int = Field(ge=1)
    pages: int = Field(ge=1)

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class ResourceResponse(BaseModel):
    """Status code plus JSON body (``None`` for an empty response)."""

    status_code: int
    body: dict[str, Any] | None = None

    @classmethod
    def envelope(cls, status_code: int, **fields: Any) -> "ResourceResponse":
        return cls(status_code=status_code, body=Envelope(**fields).to_body())

    @classmethod
    def empty(cls, status_code: int) -> "ResourceResponse":
        return cls(status_code=status_code)
