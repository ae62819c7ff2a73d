"""
Database Module Initialization
"""

from role_admin.db.session import get_db, init_db, AsyncSessionLocal
from role_admin.db.models import (
    Base,
    Tenant,
    Role,
    User,
    UserInRole,
)

__all__ = [
    "get_db",
    "init_db",
    "AsyncSessionLocal",
    "Base",
    "Tenant",
    "Role",
    "User",
    "UserInRole",
]
