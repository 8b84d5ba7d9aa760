"""
Config Package - Application configuration, database setup and logging.
"""

from config.settings import Settings, get_settings, DEFAULT_CATEGORIES
from config.database import (
    Base,
    build_engine,
    build_session_factory,
    create_schema,
    session_factory_from_settings,
)
from config.logging_setup import setup_logging

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "DEFAULT_CATEGORIES",
    # Database
    "Base",
    "build_engine",
    "build_session_factory",
    "create_schema",
    "session_factory_from_settings",
    # Logging
    "setup_logging",
]
