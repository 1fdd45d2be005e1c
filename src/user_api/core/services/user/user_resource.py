"""Request handling for the user resource.

``UserResourceHandler`` takes already-decoded request data, validates it,
makes exactly one write against the ``UserRepository`` and turns the
outcome into a ``ResourceResponse``. Nothing here knows about FastAPI.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from typing import Any

from loguru import logger

from src.user_api.core.models.envelope import ResourceResponse, UserPage
from src.user_api.core.security import hash_password
from src.user_api.core.services.user.validation import (
    UNIQUE_MESSAGE,
    ValidationResult,
    validate_user_fields,
)
from src.user_api.entities.core._base import SQL_INTEGER_MAX
from src.user_api.entities.core.user import (
    StoreResult,
    StoreStatus,
    User,
    UserRepository,
)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE = SQL_INTEGER_MAX

VALIDATION_FAILED_MESSAGE = "The given data was invalid."


def resolve_page(raw: Any) -> int:
    """Turn a raw ``page`` query value into a page number.

    Anything that is not an integer of at least 1 means the first page.
    Numbers above ``MAX_PAGE`` are clamped to it, which is past the end of
    any collection.
    """
    if isinstance(raw, bool):
        return 1
    if isinstance(raw, str):
        digits = raw.strip().lstrip("0")
        if not (digits.isascii() and digits.isdigit()):
            return 1
        if len(digits) > len(str(MAX_PAGE)):
            return MAX_PAGE
        raw = int(digits)
    if isinstance(raw, int):
        return min(raw, MAX_PAGE) if raw >= 1 else 1
    return 1


def not_found(user_id: str) -> ResourceResponse:
    return ResourceResponse.envelope(
        404, success=False, message=f"User with ID {user_id} not found"
    )


def validation_failed(errors: dict[str, list[str]]) -> ResourceResponse:
    return ResourceResponse.envelope(
        422, success=False, message=VALIDATION_FAILED_MESSAGE, errors=errors
    )


def database_error(action: str, result: StoreResult[Any]) -> ResourceResponse:
    return ResourceResponse.envelope(
        500,
        success=False,
        message=f"Database error occurred while {action}",
        error=result.error or "",
    )


def unexpected_error(action: str, exc: Exception) -> ResourceResponse:
    return ResourceResponse.envelope(
        500,
        success=False,
        message=f"An error occurred while {action}",
        error=str(exc),
    )


def user_body(user: User) -> dict[str, Any]:
    return user.to_read().model_dump(mode="json")


class UserResourceHandler:
    """List, create, show, update and delete users."""

    def __init__(
        self,
        repository: UserRepository,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        password_hasher: Callable[[str], str] = hash_password,
    ) -> None:
        self._repository = repository
        self._page_size = page_size
        self._hash_password = password_hasher

    def list_users(self, page: Any = None) -> ResourceResponse:
        current = resolve_page(page)
        result = self._repository.list(current, self._page_size)
        if not result.ok or result.value is None:
            return database_error("listing users", result)

        slice_ = result.value
        users = UserPage(
            items=[user.to_read() for user in slice_.items],
            total=slice_.total,
            page=slice_.page,
            page_size=slice_.page_size,
            pages=max(1, math.ceil(slice_.total / slice_.page_size)),
        )
        return ResourceResponse(status_code=200, body=users.to_body())

    def create_user(self, fields: Mapping[str, Any]) -> ResourceResponse:
        validation = validate_user_fields(fields)
        failure = self._check_email_unique(validation)
        if failure is not None:
            return failure
        if not validation.passed:
            logger.info("User creation rejected: {}", sorted(validation.errors))
            return validation_failed(validation.errors)

        data = dict(validation.data)
        try:
            data["password"] = self._hash_password(data["password"])
            result = self._repository.create(data)
        except Exception as exc:
            logger.exception("Unexpected error while creating user")
            return unexpected_error("creating the user", exc)

        if result.status is StoreStatus.OK and result.value is not None:
            logger.info("Created user {}", result.value.id)
            return ResourceResponse.envelope(
                201,
                success=True,
                message="User created successfully",
                data=user_body(result.value),
            )
        return database_error("creating user", result)

    def show_user(self, user_id: str) -> ResourceResponse:
        result = self._repository.find_by_id(user_id)
        if result.status is StoreStatus.NOT_FOUND:
            return not_found(user_id)
        if result.status is StoreStatus.OK and result.value is not None:
            return ResourceResponse.envelope(
                200,
                success=True,
                message="User retrieved successfully",
                data=user_body(result.value),
            )
        return database_error("retrieving user", result)

    def update_user(self, user_id: str, fields: Mapping[str, Any]) -> ResourceResponse:
        existing = self._repository.find_by_id(user_id)
        if existing.status is StoreStatus.NOT_FOUND:
            return not_found(user_id)
        if not existing.ok:
            return database_error("updating user", existing)

        validation = validate_user_fields(fields, partial=True)
        failure = self._check_email_unique(validation, exclude_id=user_id)
        if failure is not None:
            return failure
        if not validation.passed:
            logger.info("Update of user {} rejected: {}", user_id, sorted(validation.errors))
            return validation_failed(validation.errors)

        data = dict(validation.data)
        try:
            if "password" in data:
                data["password"] = self._hash_password(data["password"])
            result = self._repository.update(user_id, data)
        except Exception as exc:
            logger.exception("Unexpected error while updating user {}", user_id)
            return unexpected_error("updating the user", exc)

        if result.status is StoreStatus.NOT_FOUND:
            # Deleted between the lookup and the write
            return not_found(user_id)
        if result.status is StoreStatus.OK and result.value is not None:
            logger.info("Updated user {} fields {}", user_id, sorted(data))
            return ResourceResponse.envelope(
                200,
                success=True,
                message="User updated successfully",
                data=user_body(result.value),
            )
        return database_error("updating user", result)

    def delete_user(self, user_id: str) -> ResourceResponse:
        result = self._repository.delete(user_id)
        if result.status is StoreStatus.NOT_FOUND:
            return not_found(user_id)
        if result.status is StoreStatus.OK:
            logger.info("Deleted user {}", user_id)
            return ResourceResponse.empty(204)
        return database_error("deleting user", result)

    def _check_email_unique(
        self, validation: ValidationResult, exclude_id: str | None = None
    ) -> ResourceResponse | None:
        """Record a uniqueness error on ``validation``; a response only if the lookup failed."""
        email = validation.data.get("email")
        if email is None:
            return None

        taken = self._repository.email_taken(email, exclude_id=exclude_id)
        if not taken.ok:
            return database_error("checking email uniqueness", taken)
        if taken.value:
            validation.add_error("email", UNIQUE_MESSAGE)
        return None
