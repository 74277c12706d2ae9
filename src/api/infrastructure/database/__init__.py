"""Database infrastructure - async engine, sessions and the declarative base."""

from infrastructure.database.dependencies import (
    close_database_connections,
    get_engine,
    get_session,
    get_sessionmaker,
)
from infrastructure.database.models import Base, TimestampMixin

__all__ = [
    "Base",
    "TimestampMixin",
    "close_database_connections",
    "get_engine",
    "get_session",
    "get_sessionmaker",
]
