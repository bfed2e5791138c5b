"""
Database Session Management Module.

This module handles the creation and management of database connections and sessions
using SQLAlchemy. The engine is owned by a Database object that the application
creates in its lifespan and disposes on shutdown; route handlers receive a
per-request session through the get_db dependency instead of a module-level handle.

Usage:
- In FastAPI route handlers, use the get_db dependency to obtain a database session
- Example: `def my_route(db: Session = Depends(get_db)):`
"""

from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from nerdytips.core.logger import setup_logger
from nerdytips.db.base import Base

logger = setup_logger("nerdytips.db.session")


class Database:
    """
    Owns the SQLAlchemy engine and session factory for one application instance.
    """

    def __init__(self, url: str, echo: bool = False):
        connect_args = {}
        if make_url(url).get_backend_name() == "sqlite":
            # Requests are served from a thread pool
            connect_args["check_same_thread"] = False

        self.url = url
        self.engine = create_engine(url, echo=echo, connect_args=connect_args)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def create_all(self) -> None:
        """Create the users and predictions tables if they do not exist."""
        # Registers the models on Base.metadata
        from nerdytips.db import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info(f"Database schema ready at {self.engine.url.render_as_string(hide_password=True)}")

    def session(self) -> Session:
        return self.SessionLocal()

    def ping(self) -> bool:
        """Return True when a trivial query succeeds."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a database session.

    This function creates a new SQLAlchemy session from the application's
    Database and ensures it is properly closed after use, even if exceptions
    occur during the request handling.

    Yields:
        Session: A SQLAlchemy database session.
    """
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
