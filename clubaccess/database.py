"""
Database Connection and Session Management
Uses PostgreSQL with asyncpg (SQLite with aiosqlite for local runs and tests)
"""

import asyncio
import logging
import sqlite3
from contextlib import asynccontextmanager
from asyncpg import exceptions as pg_errors
from databases import Database
from sqlalchemy import create_engine, MetaData
from sqlalchemy.orm import declarative_base
from clubaccess.config import settings
from clubaccess.errors import DependencyUnavailable

logger = logging.getLogger(__name__)

# Database URL
DATABASE_URL = settings.DATABASE_URL

# For Supabase connection pooler (pgbouncer), disable prepared statements
if "supabase.com" in DATABASE_URL or "pooler.supabase.com" in DATABASE_URL:
    db_options = {"min_size": 1, "max_size": 5, "statement_cache_size": 0}
elif DATABASE_URL.startswith("postgresql"):
    db_options = {"min_size": 1, "max_size": 10}
else:
    db_options = {}

# Create database instance for async queries
database = Database(DATABASE_URL, **db_options)

# Create SQLAlchemy engine for migrations and table creation
engine = create_engine(
    DATABASE_URL.replace("postgresql://", "postgresql+psycopg2://")
    if "postgresql://" in DATABASE_URL else DATABASE_URL
)

# Metadata for models
metadata = MetaData()

# Base class for models
Base = declarative_base(metadata=metadata)

# Failures that mean the store could not be reached, as opposed to a bad query
UNAVAILABLE_ERRORS = (
    OSError,
    asyncio.TimeoutError,
    pg_errors.PostgresConnectionError,
    pg_errors.CannotConnectNowError,
    pg_errors.TooManyConnectionsError,
    pg_errors.InterfaceError,
)

# sqlite reports lock contention and I/O trouble through OperationalError,
# which also carries schema errors such as "no such table"
SQLITE_UNAVAILABLE_MESSAGES = (
    "database is locked",
    "database table is locked",
    "unable to open database",
    "disk i/o error",
)


def is_store_unavailable(exc: BaseException) -> bool:
    """True if the exception means the store is unreachable or busy"""
    if isinstance(exc, sqlite3.OperationalError):
        message = str(exc).lower()
        return any(marker in message for marker in SQLITE_UNAVAILABLE_MESSAGES)
    return isinstance(exc, UNAVAILABLE_ERRORS)


@asynccontextmanager
async def store_guard(operation: str):
    """Translate connectivity failures into DependencyUnavailable"""
    try:
        yield
    except (sqlite3.OperationalError,) + UNAVAILABLE_ERRORS as exc:
        if not is_store_unavailable(exc):
            raise
        logger.error("Store unavailable during %s: %s", operation, exc)
        raise DependencyUnavailable() from exc

async def connect_db():
    """Connect to database on startup"""
    await database.connect()
    logger.info("Database connected")


async def disconnect_db():
    """Disconnect from database on shutdown"""
    await database.disconnect()
    logger.info("Database disconnected")
