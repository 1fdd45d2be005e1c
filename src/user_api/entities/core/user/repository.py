"""User repository for data access operations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from src.user_api.entities.core._base import SQL_INTEGER_MAX, utc_now
from src.user_api.entities.core.user.entity import User
from src.user_api.entities.core.user.table import UserTable

T = TypeVar("T")

# Columns a caller may write; id and timestamps are owned by the repository
WRITABLE_FIELDS = frozenset({"name", "email", "password", "age", "membership_status"})


class StoreStatus(str, Enum):
    """Outcome of a repository call."""

    OK = "ok"
    NOT_FOUND = "not_found"
    CONSTRAINT_VIOLATION = "constraint_violation"
    DATABASE_ERROR = "database_error"


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Value returned by every repository operation instead of raising."""

    status: StoreStatus
    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is StoreStatus.OK

    @classmethod
    def success(cls, value: T | None = None) -> StoreResult[T]:
        return cls(StoreStatus.OK, value=value)

    @classmethod
    def not_found(cls, error: str | None = None) -> StoreResult[T]:
        return cls(StoreStatus.NOT_FOUND, error=error)

    @classmethod
    def failure(cls, status: StoreStatus, error: str) -> StoreResult[T]:
        return cls(status, error=error)


@dataclass(frozen=True)
class UserPageSlice:
    """One page of users plus the size of the whole collection."""

    page: int
    page_size: int
    total: int
    items: list[User] = field(default_factory=list)


class UserRepository:
    """Data-access layer for users.

    Writes commit immediately. Database failures are rolled back, logged and
    reported through ``StoreResult`` so callers never see a raw SQLAlchemy
    or driver exception.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def _to_entity(row: UserTable) -> User:
        return User.model_validate(row, from_attributes=True)

    def _failure(
        self, action: str, exc: SQLAlchemyError | OverflowError
    ) -> StoreResult[Any]:
        self._session.rollback()
        diagnostic = str(getattr(exc, "orig", None) or exc)
        status = (
            StoreStatus.CONSTRAINT_VIOLATION
            if isinstance(exc, IntegrityError)
            else StoreStatus.DATABASE_ERROR
        )
        logger.bind(
            action=action,
            store_status=status.value,
            error_type=type(exc).__name__,
        ).error("Database operation failed: {}", diagnostic)
        return StoreResult.failure(status, diagnostic)

    def list(self, page: int, page_size: int) -> StoreResult[UserPageSlice]:
        """Return the ``page``-th slice (1-based) ordered by creation time.

        A page whose offset does not fit in a SQL integer is past the end of
        any table, so it comes back empty without a row query.
        """
        offset = (page - 1) * page_size
        try:
            total = self._session.exec(
                select(func.count()).select_from(UserTable)
            ).one()
            rows = []
            if offset <= SQL_INTEGER_MAX:
                statement = (
                    select(UserTable)
                    .order_by(UserTable.created_at, UserTable.id)
                    .offset(offset)
                    .limit(page_size)
                )
                rows = self._session.exec(statement).all()
        except (SQLAlchemyError, OverflowError) as e:
            return self._failure("list users", e)

        return StoreResult.success(
            UserPageSlice(
                page=page,
                page_size=page_size,
                total=total,
                items=[self._to_entity(row) for row in rows],
            )
        )

    def find_by_id(self, user_id: str) -> StoreResult[User]:
        try:
            row = self._session.get(UserTable, user_id)
        except (SQLAlchemyError, OverflowError) as e:
            return self._failure("find user", e)
        if row is None:
            return StoreResult.not_found(f"User with ID {user_id} not found")
        return StoreResult.success(self._to_entity(row))

    def email_taken(
        self, email: str, exclude_id: str | None = None
    ) -> StoreResult[bool]:
        """Whether another user already owns ``email`` (case-insensitive)."""
        statement = select(UserTable.id).where(
            func.lower(UserTable.email) == email.lower()
        )
        if exclude_id is not None:
            statement = statement.where(UserTable.id != exclude_id)
        try:
            taken = self._session.exec(statement.limit(1)).first() is not None
        except (SQLAlchemyError, OverflowError) as e:
            return self._failure("check email", e)
        return StoreResult.success(taken)

    def create(self, fields: Mapping[str, Any]) -> StoreResult[User]:
        row = UserTable(**{k: v for k, v in fields.items() if k in WRITABLE_FIELDS})
        try:
            self._session.add(row)
            self._session.commit()
            self._session.refresh(row)
        except (SQLAlchemyError, OverflowError) as e:
            return self._failure("create user", e)
        return StoreResult.success(self._to_entity(row))

    def update(self, user_id: str, fields: Mapping[str, Any]) -> StoreResult[User]:
        """Write only the supplied ``fields``; everything else keeps its value."""
        changes = {k: v for k, v in fields.items() if k in WRITABLE_FIELDS}
        try:
            row = self._session.get(UserTable, user_id)
            if row is None:
                return StoreResult.not_found(f"User with ID {user_id} not found")
            if not changes:
                return StoreResult.success(self._to_entity(row))

            for name, value in changes.items():
                setattr(row, name, value)
            row.updated_at = utc_now()
            self._session.add(row)
            self._session.commit()
            self._session.refresh(row)
        except (SQLAlchemyError, OverflowError) as e:
            return self._failure("update user", e)
        return StoreResult.success(self._to_entity(row))

    def delete(self, user_id: str) -> StoreResult[None]:
        try:
            row = self._session.get(UserTable, user_id)
            if row is None:
                return StoreResult.not_found(f"User with ID {user_id} not found")
            self._session.delete(row)
            self._session.commit()
        except (SQLAlchemyError, OverflowError) as e:
            return self._failure("delete user", e)
        return StoreResult.success()
