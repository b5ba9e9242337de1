"""
Database configuration and session management

This module provides the SQLAlchemy setup for the store. The engine is not
created at import time: the application lifespan builds a Database, keeps it on
app.state and disposes it on shutdown.
"""

import logging
import threading
from typing import Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, declarative_base, Session

from portfolio.shared.errors import StoreUnavailable

logger = logging.getLogger(__name__)

# Base class for ORM models
Base = declarative_base()


class Database:
    """Store client: one engine and its session factory."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        self.tables_created = False
        self._tables_lock = threading.Lock()

    @classmethod
    def from_url(cls, database_url: str, connect_timeout: int = 5, **engine_kwargs) -> "Database":
        """
        Create a store client for the given SQLAlchemy URL.

        connect_timeout is passed to the driver for server backends; SQLite
        takes no such argument.
        """
        url = make_url(database_url)
        if url.get_backend_name() != "sqlite":
            engine_kwargs.setdefault("connect_args", {"connect_timeout": connect_timeout})
        engine = create_engine(
            url,
            pool_pre_ping=True,
            echo=False,  # Set to True for SQL query logging during development
            **engine_kwargs,
        )
        return cls(engine)

    def create_tables(self) -> None:
        with self._tables_lock:
            if self.tables_created:
                return
            Base.metadata.create_all(bind=self.engine)
            self.tables_created = True

    def is_ready(self) -> bool:
        """
        True once the tables exist.

        Tables are created on the first successful connectivity check, which
        covers a process that started while the database was unreachable.
        After that, connectivity is checked by the session itself (see get_db).
        """
        if self.tables_created:
            return True
        if not self.check_connection():
            return False
        self.create_tables()
        return True

    def check_connection(self) -> bool:
        """
        Test database connectivity
        Returns True if connection successful, False otherwise
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"Database connectivity check failed: {type(e).__name__}: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Optional[Database]:
    """Return the store client owned by the running application, if any."""
    return getattr(request.app.state, "database", None)


def get_db(request: Request):
    """
    Dependency injection for database sessions
    Usage in FastAPI endpoints:

    @app.get("/endpoint")
    def endpoint(db: Session = Depends(get_db)):
        # use db here
        pass
    """
    database = get_database(request)
    if database is None or not database.is_ready():
        raise StoreUnavailable()

    db: Session = database.SessionLocal()
    try:
        try:
            # Checks out a pooled connection; pool_pre_ping validates it
            db.connection()
        except OperationalError as e:
            logger.warning(f"Database connection failed: {type(e).__name__}: {e}")
            raise StoreUnavailable()
        yield db
    finally:
        db.close()
