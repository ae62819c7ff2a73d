"""
Data Access Layer Module Initialization
"""

from role_admin.repositories.user_in_role_repo import UserInRoleRepository

__all__ = [
    "UserInRoleRepository",
]
