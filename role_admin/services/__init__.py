"""
Service Layer Module Initialization
"""

from role_admin.services.user_in_role_service import UserInRoleService

__all__ = [
    "UserInRoleService",
]
