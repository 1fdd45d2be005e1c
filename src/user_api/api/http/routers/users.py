"""User API router with CRUD operations."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query
from starlette.responses import JSONResponse, Response

from src.user_api.api.http.deps import get_user_handler
from src.user_api.core.models.envelope import ResourceResponse
from src.user_api.core.services import UserResourceHandler

router = APIRouter(prefix="/users", tags=["users"])


def to_response(resource: ResourceResponse) -> Response:
    """Render a handler result; a response without a body stays empty."""
    if resource.body is None:
        return Response(status_code=resource.status_code)
    return JSONResponse(status_code=resource.status_code, content=resource.body)


@router.get("", response_model=None)
def list_users(
    page: str | None = Query(default=None),
    handler: UserResourceHandler = Depends(get_user_handler),
) -> Response:
    """List users, one page at a time."""
    return to_response(handler.list_users(page))


@router.post("", response_model=None, status_code=201)
def create_user(
    payload: dict[str, Any] | None = Body(default=None),
    handler: UserResourceHandler = Depends(get_user_handler),
) -> Response:
    """Create a new user."""
    return to_response(handler.create_user(payload or {}))


@router.get("/{user_id}", response_model=None)
def get_user(
    user_id: str,
    handler: UserResourceHandler = Depends(get_user_handler),
) -> Response:
    """Get a user by ID."""
    return to_response(handler.show_user(user_id))


@router.api_route("/{user_id}", methods=["PUT", "PATCH"], response_model=None)
def update_user(
    user_id: str,
    payload: dict[str, Any] | None = Body(default=None),
    handler: UserResourceHandler = Depends(get_user_handler),
) -> Response:
    """Update the fields present in the body; the rest keep their values."""
    return to_response(handler.update_user(user_id, payload or {}))


@router.delete("/{user_id}", response_model=None, status_code=204)
def delete_user(
    user_id: str,
    handler: UserResourceHandler = Depends(get_user_handler),
) -> Response:
    """Delete a user permanently."""
    return to_response(handler.delete_user(user_id))
