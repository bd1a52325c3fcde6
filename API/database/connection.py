"""
Database connection management.

DatabaseConnection owns the engine (and its connection pool). It is built
explicitly at startup, stored on app.state.db, and disposed at shutdown.
Request handlers receive sessions through the get_db dependency.
"""

from contextlib import contextmanager
from typing import Generator, Optional

from fastapi import Request
from loguru import logger
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .base import Base


class DatabaseConnection:
    """Engine + session factory with an explicit lifecycle."""

    def __init__(self, url: str, pool_size: int = 10, echo: bool = False):
        self.url = url
        self.pool_size = pool_size
        self.echo = echo
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("DatabaseConnection is not initialized")
        return self._engine

    def initialize(self, create_tables: bool = True) -> None:
        """Create the engine and (optionally) all tables."""
        if self._engine is not None:
            return

        self._engine = self._build_engine()
        self._session_factory = sessionmaker(
            bind=self._engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

        if create_tables:
            # Import all models so they register with Base.metadata
            from . import models  # noqa: F401
            Base.metadata.create_all(bind=self._engine, checkfirst=True)

        logger.info(f"Database engine ready ({self._engine.url.get_backend_name()})")

    def dispose(self) -> None:
        """Close every pooled connection."""
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Database engine disposed")
        self._engine = None
        self._session_factory = None

    def _build_engine(self) -> Engine:
        if self.url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in self.url or self.url in ("sqlite://", "sqlite+pysqlite://"):
                kwargs["poolclass"] = StaticPool
            engine = create_engine(self.url, echo=self.echo, **kwargs)
            _enable_sqlite_foreign_keys(engine)
            return engine

        return create_engine(
            self.url,
            echo=self.echo,
            pool_size=self.pool_size,
            max_overflow=self.pool_size,
            pool_pre_ping=True,
        )

    def new_session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("DatabaseConnection is not initialized")
        return self._session_factory()

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Session context manager: rolls back on error, always closes."""
        session = self.new_session()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> None:
        with self.get_session() as session:
            session.execute(text("SELECT 1"))


def _enable_sqlite_foreign_keys(engine: Engine) -> None:
    from sqlalchemy import event

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency: a session from the app's DatabaseConnection."""
    db: DatabaseConnection = request.app.state.db
    with db.get_session() as session:
        yield session
