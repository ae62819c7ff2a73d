"""
SQLAlchemy ORM Model Definitions

Defines the database table structures, including:
- tenants: Tenants Table
- roles: Roles Table
- users: Users Table
- user_in_roles: User-Role Assignments Table
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from role_admin.common.time import utc_now_naive


class Base(DeclarativeBase):
    """SQLAlchemy ORM Base Class"""
    pass


class Tenant(Base):
    """
    Tenants Table

    Top-level owner of roles, users and their assignments.
    """
    __tablename__ = "tenants"

    # Primary Key ID
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # Tenant Name
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    # Creation Time
    created_on: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now_naive, nullable=False
    )


class Role(Base):
    """
    Roles Table
    """
    __tablename__ = "roles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # Owning tenant, NULL for roles shared by all tenants
    tenant_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("tenants.id"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_on: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now_naive, nullable=False
    )


class User(Base):
    """
    Users Table
    """
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("tenants.id"), nullable=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
    created_on: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now_naive, nullable=False
    )


class UserInRole(Base):
    """
    User-Role Assignments Table

    Grants a user a role inside a tenant. created_by / updated_by reference the
    users who wrote the row.
    """
    __tablename__ = "user_in_roles"

    # Primary Key ID, generated on insert
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # Tenant ID (Foreign Key)
    tenant_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("tenants.id"), nullable=True
    )
    # Role ID (Foreign Key)
    role_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False
    )
    # User ID (Foreign Key)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    # Audit: creator
    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=True
    )
    # Creation Time
    created_on: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now_naive, nullable=False
    )
    # Audit: last writer
    updated_by: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=True
    )
    # Update Time, NULL until the first update
    updated_on: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # Relationships (navigation properties)
    tenant: Mapped[Optional["Tenant"]] = relationship("Tenant", foreign_keys=[tenant_id])
    role: Mapped["Role"] = relationship("Role", foreign_keys=[role_id])
    user: Mapped["User"] = relationship("User", foreign_keys=[user_id])
    created_by_user: Mapped[Optional["User"]] = relationship(
        "User", foreign_keys=[created_by]
    )
    updated_by_user: Mapped[Optional["User"]] = relationship(
        "User", foreign_keys=[updated_by]
    )

    __table_args__ = (
        Index("idx_user_in_roles_user_id", "user_id"),
        Index("idx_user_in_roles_role_id", "role_id"),
        Index("idx_user_in_roles_tenant_id", "tenant_id"),
    )
