"""
Test Configuration Module
"""

from dataclasses import dataclass
from typing import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from role_admin.db.models import Base, Role, Tenant, User


# Use in-memory database for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def async_engine():
    """Create async database engine for testing"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Clean up
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for testing"""
    async_session = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session


@dataclass
class Directory:
    """Reference rows the assignments point at"""

    acme: Tenant
    globex: Tenant
    admin: Role
    viewer: Role
    alice: User
    bob: User
    carol: User


@pytest_asyncio.fixture
async def directory(db_session) -> Directory:
    """Seed tenants, roles and users"""
    acme = Tenant(name="Acme")
    globex = Tenant(name="Globex")
    db_session.add_all([acme, globex])
    await db_session.flush()

    admin = Role(name="Administrator", description="Full access", tenant_id=acme.id)
    viewer = Role(name="Viewer", tenant_id=acme.id)
    alice = User(name="Alice", email="alice@acme.test", tenant_id=acme.id)
    bob = User(name="Bob", email="bob@globex.test", tenant_id=globex.id)
    carol = User(name="Carol", email=None, tenant_id=acme.id)
    db_session.add_all([admin, viewer, alice, bob, carol])
    await db_session.commit()

    return Directory(
        acme=acme,
        globex=globex,
        admin=admin,
        viewer=viewer,
        alice=alice,
        bob=bob,
        carol=carol,
    )
