"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.user_api.api.http.app_data import ApplicationDependencies
from src.user_api.core.services import DbSessionService, UserResourceHandler
from src.user_api.entities.core.user import UserRepository
from src.user_api.runtime.context import get_config


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Open a session for the duration of one request."""
    session = database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_user_repository(db: Session = Depends(get_db_session)) -> UserRepository:
    return UserRepository(db)


def get_user_handler(
    repository: UserRepository = Depends(get_user_repository),
) -> UserResourceHandler:
    return UserResourceHandler(
        repository, page_size=get_config().pagination.page_size
    )
