"""Async Session Factory — provides async DB sessions for direct usage outside FastAPI.

Invariants:
    - Meant for scripts (CSV import) and test fixtures
    - Caller owns the returned engine's lifetime (dispose when done)
    - Every engine created here folds case with Python's str.lower on SQLite,
      the same folding the catalog applies to search terms

Design Decisions:
    - Separate from infrastructure/database.py: no pooling or error mapping,
      scripts want raw SQLAlchemy errors
    - SQLite's built-in lower() only folds ASCII; an application-defined
      lower() registered on connect overrides it per connection
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection, connection_record) -> None:
    dbapi_connection.create_function("lower", 1, _unicode_lower)


def register_sqlite_functions(engine: AsyncEngine) -> AsyncEngine:
    """Install the Unicode lower() on every new SQLite connection of engine."""
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _register_sqlite_functions)
    return engine


def create_session_factory(
    database_url: str,
) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """Create an engine and async session factory for the given database URL."""
    engine = register_sqlite_functions(create_async_engine(database_url, echo=False))
    return engine, async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
