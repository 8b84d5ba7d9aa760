"""
Database setup - SQLAlchemy engine and session factory for the remote store.

The engine is only built when both store credentials are configured.
Without them the app runs against a no-op store and nothing here is touched.
"""

import logging
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from config.settings import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """
    Create an engine for the given URL.

    In-memory SQLite gets a single shared connection so every session
    (and every write thread) sees the same database.
    """
    in_memory = database_url == "sqlite://" or (
        database_url.startswith("sqlite") and ":memory:" in database_url
    )
    if in_memory:
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to the engine; objects stay usable after commit."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def create_schema(engine: Engine) -> None:
    """Create any missing tables (no migrations)."""
    # Import registers the entities on Base.metadata
    import models.entities  # noqa: F401

    Base.metadata.create_all(engine)


def session_factory_from_settings(settings: Settings) -> Optional[sessionmaker]:
    """Session factory for the configured store, or None without credentials."""
    if not settings.has_store_credentials:
        return None

    engine = build_engine(settings.database_url)
    if settings.store_create_schema:
        create_schema(engine)
        logger.info("Store schema ensured")
    return build_session_factory(engine)
