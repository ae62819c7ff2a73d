"""
Dependency Wiring Module

Builds repositories and services around a database session for the
enclosing request layer.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from role_admin.config import Settings, get_settings
from role_admin.query.fields import user_in_role_fields
from role_admin.query.projection import FieldMapper
from role_admin.repositories.sqlalchemy import SQLAlchemyUserInRoleRepository
from role_admin.services import UserInRoleService


# ============ Repository ============

def get_user_in_role_repo(db: AsyncSession) -> SQLAlchemyUserInRoleRepository:
    """Get UserInRole Repository"""
    return SQLAlchemyUserInRoleRepository(db, fields=user_in_role_fields)


# ============ Service ============

def get_user_in_role_service(
    db: AsyncSession, settings: Optional[Settings] = None
) -> UserInRoleService:
    """
    Get UserInRole Service

    Args:
        db: Database session owning the unit of work
        settings: Configuration, defaults to the cached application settings
    """
    settings = settings or get_settings()
    return UserInRoleService(
        get_user_in_role_repo(db),
        mapper=FieldMapper(user_in_role_fields),
        fields=user_in_role_fields,
        raise_on_missing=settings.GET_BY_ID_RAISE_NOT_FOUND,
    )
