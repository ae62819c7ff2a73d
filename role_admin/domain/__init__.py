"""
Domain Model Module Initialization
"""

from role_admin.domain.filter import FilterCriteria, parse_filters
from role_admin.domain.patch import PatchOperation
from role_admin.domain.user_in_role import (
    SETTABLE_FIELDS,
    RoleRef,
    TenantRef,
    UserInRole,
    UserInRoleCreate,
    UserInRoleUpdate,
    UserRef,
)

__all__ = [
    "FilterCriteria",
    "parse_filters",
    "PatchOperation",
    "SETTABLE_FIELDS",
    "RoleRef",
    "TenantRef",
    "UserInRole",
    "UserInRoleCreate",
    "UserInRoleUpdate",
    "UserRef",
]
