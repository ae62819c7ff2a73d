"""
Query Helpers Module Initialization
"""

from role_admin.query.fields import EntityFields, Navigation, normalize_name, user_in_role_fields
from role_admin.query.filters import FilterService
from role_admin.query.patch import apply_patch
from role_admin.query.projection import FieldMapper, split_fields

__all__ = [
    "EntityFields",
    "Navigation",
    "normalize_name",
    "user_in_role_fields",
    "FilterService",
    "apply_patch",
    "FieldMapper",
    "split_fields",
]
