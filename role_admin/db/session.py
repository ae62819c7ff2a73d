"""
Database Session Management Module

Provides asynchronous database session management, supporting SQLite and PostgreSQL.
"""

from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from role_admin.config import get_settings

# Get configuration
settings = get_settings()

# Create asynchronous database engine
# echo=True prints SQL statements in DEBUG mode
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    connect_args={"check_same_thread": False}
    if settings.DATABASE_TYPE == "sqlite"
    else {},
)

# SQLite leaves foreign keys unenforced unless asked
if settings.DATABASE_TYPE == "sqlite":
    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

# Create asynchronous session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,  # Loaded rows stay readable after the write commits
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Get database session (one per unit of work)

    Pending changes are rolled back when the caller fails.

    Yields:
        AsyncSession: Async database session

    Example:
        async for session in get_db():
            service = get_user_in_role_service(session)
            await service.delete(user_in_role_id)
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """
    Initialize Database

    Creates all defined table structures.
    """
    from role_admin.db.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
