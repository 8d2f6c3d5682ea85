"""
Database engine and connectivity check.
One Database per app instance; the engine owns the shared connection pool.
"""

import logging

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from core.exceptions import ConnectivityError


class Base(DeclarativeBase):
    """Declarative base for all tables."""


class Database:
    """
    Wraps a SQLAlchemy engine.
    Each repository call checks out one pooled connection and commits on exit.
    """

    def __init__(
        self,
        url: str,
        logger: logging.Logger,
        *,
        echo: bool = False,
        pool_size: int = 5,
    ) -> None:
        self.url = url
        self.logger = logger
        kwargs: dict = {"echo": echo, "pool_pre_ping": True}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # Every connection must see the same in-memory database
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_size"] = pool_size
        self.engine = create_engine(url, **kwargs)

    def ping(self) -> None:
        """Round-trip a trivial statement. Raises ConnectivityError if the store is unreachable."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            self.logger.error("database_ping_failed", extra={"error": str(exc)})
            raise ConnectivityError() from exc

    def create_schema(self) -> None:
        """
        Create missing tables from model metadata. Idempotent.
        Existing tables are left untouched; column changes need a real migration.
        """
        # Import registers the tables on Base.metadata
        import models.student  # noqa: F401

        Base.metadata.create_all(self.engine)
        self.logger.info("database_schema_ready", extra={"tables": sorted(Base.metadata.tables)})

    def dispose(self) -> None:
        self.engine.dispose()
