"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import text
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from src.user_api.runtime.config.config_data import ConfigData
from src.user_api.runtime.context import get_config


class DbSessionService:
    def __init__(self, config: ConfigData | None = None):
        """Initialize the shared database engine and session factory."""

        main_config = config or get_config()
        db_config = main_config.database

        logger.info(
            "Configuring database engine for environment: {}", main_config.app.environment
        )
        engine_kwargs = {
            "echo": db_config.echo,
            "pool_pre_ping": True,
            "connect_args": self._get_connect_args(main_config),
        }

        if db_config.is_sqlite:
            if ":memory:" in db_config.url or db_config.url.rstrip("/") == "sqlite:":
                # One shared connection, otherwise every checkout sees an empty database
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                }
            )

        self._engine = create_engine(db_config.url, **engine_kwargs)

    @property
    def engine(self):
        return self._engine

    def _get_connect_args(self, config: ConfigData) -> dict:
        """Get database-specific connection arguments."""
        connect_args = {}

        if config.database.is_sqlite:
            connect_args.update(
                {
                    "check_same_thread": False,  # sessions cross FastAPI's threadpool
                    "timeout": 20,  # lock timeout
                }
            )

            if config.app.environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )

        return connect_args

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Context manager style helper for scripts and tests."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(
                "Database transaction failed",
                extra={
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(
                "Database health check failed",
                extra={
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            return False

    def dispose(self) -> None:
        """Close every pooled connection."""
        self._engine.dispose()
