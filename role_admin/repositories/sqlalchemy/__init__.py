"""
SQLAlchemy Repository Implementation Module Initialization
"""

from role_admin.repositories.sqlalchemy.user_in_role_repo import SQLAlchemyUserInRoleRepository

__all__ = [
    "SQLAlchemyUserInRoleRepository",
]
