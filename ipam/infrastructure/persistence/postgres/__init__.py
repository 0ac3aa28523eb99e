"""PostgreSQL persistence adapters."""

from .database import get_engine, get_session_factory, normalize_database_url
from .health import PostgresHealthChecker
from .ip_repository import PostgresIPRepository
from .subnet_repository import PostgresSubnetRepository

__all__ = [
    "PostgresHealthChecker",
    "PostgresIPRepository",
    "PostgresSubnetRepository",
    "get_engine",
    "get_session_factory",
    "normalize_database_url",
]
