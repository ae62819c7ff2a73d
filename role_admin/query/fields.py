"""
Field Registry Module

Static per-entity table of the names callers may use for sorting, filtering,
projection and patching. Names match case- and underscore-insensitively, so
"role_id", "RoleId" and "roleid" resolve to the same column, and the legacy
navigation names ("RoleId_Role") resolve through explicit aliases.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, Optional

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import InstrumentedAttribute

from role_admin.common.errors import ValidationError
from role_admin.db.models import UserInRole


def normalize_name(name: str) -> str:
    """Fold a field name for lookup ("RoleId" -> "roleid")"""
    return name.strip().replace("_", "").lower()


@lru_cache(maxsize=None)
def _column_map(entity: type) -> dict[str, str]:
    """Normalized name -> attribute key for every column of an ORM class"""
    return {normalize_name(attr.key): attr.key for attr in sa_inspect(entity).column_attrs}


@dataclass(frozen=True)
class Navigation:
    """
    Navigation property declaration

    Attributes:
        name: Relationship attribute on the ORM entity
        aliases: Additional accepted spellings
    """

    name: str
    aliases: tuple[str, ...] = ()


class EntityFields:
    """
    Field Registry

    Resolves caller supplied names to ORM columns and relationships of one
    entity and rejects anything else with a ValidationError.
    """

    def __init__(
        self,
        entity: type,
        navigations: Iterable[Navigation] = (),
        searchable: Iterable[str] = (),
    ):
        """
        Initialize Registry

        Args:
            entity: ORM class
            navigations: Relationships exposed as navigation properties
            searchable: Field paths matched by the free-text search term
        """
        self.entity = entity
        mapper = sa_inspect(entity)
        self.columns: tuple[str, ...] = tuple(attr.key for attr in mapper.column_attrs)

        self._navigations: dict[str, str] = {}
        names = []
        for navigation in navigations:
            if navigation.name not in mapper.relationships:
                raise ValueError(
                    f"{entity.__name__} has no relationship '{navigation.name}'"
                )
            names.append(navigation.name)
            for alias in (navigation.name, *navigation.aliases):
                self._navigations[normalize_name(alias)] = navigation.name
        self.navigations: tuple[str, ...] = tuple(names)
        self.searchable: tuple[str, ...] = tuple(searchable)

    # ============ Lookup ============

    def column_name(self, name: str) -> Optional[str]:
        """Canonical column key for a name, or None"""
        return _column_map(self.entity).get(normalize_name(name))

    def navigation_name(self, name: str) -> Optional[str]:
        """Canonical relationship key for a name or alias, or None"""
        return self._navigations.get(normalize_name(name))

    def column(self, name: str) -> InstrumentedAttribute:
        """
        Resolve a scalar column

        Raises:
            ValidationError: Name is not a column of the entity
        """
        key = self.column_name(name)
        if key is None:
            raise ValidationError(
                message=f"Unknown field '{name}'",
                code="unknown_field",
                details={"field": name},
            )
        return getattr(self.entity, key)

    def relationship(self, name: str) -> InstrumentedAttribute:
        """
        Resolve a navigation property

        Raises:
            ValidationError: Name is not a registered navigation
        """
        key = self.navigation_name(name)
        if key is None:
            raise ValidationError(
                message=f"Unknown navigation property '{name}'",
                code="unknown_field",
                details={"field": name},
            )
        return getattr(self.entity, key)

    def target_column(self, navigation: str, name: str) -> InstrumentedAttribute:
        """Resolve a column on the entity a navigation points to"""
        target = self.relationship(navigation).property.mapper.class_
        key = _column_map(target).get(normalize_name(name))
        if key is None:
            raise ValidationError(
                message=f"Unknown field '{navigation}.{name}'",
                code="unknown_field",
                details={"field": f"{navigation}.{name}"},
            )
        return getattr(target, key)

    # ============ Paths ============

    def resolve_path(self, path: str) -> tuple[str, ...]:
        """
        Resolve a dotted field path to canonical keys

        "Id" -> ("id",), "RoleId_Role.Name" -> ("role", "name"),
        "role" -> ("role",)

        Raises:
            ValidationError: Unknown segment or nesting deeper than one level
        """
        head, _, rest = path.strip().partition(".")
        if not rest:
            key = self.column_name(head) or self.navigation_name(head)
            if key is None:
                raise ValidationError(
                    message=f"Unknown field '{path}'",
                    code="unknown_field",
                    details={"field": path},
                )
            return (key,)
        if "." in rest:
            raise ValidationError(
                message=f"Field path '{path}' is nested too deeply",
                code="unknown_field",
                details={"field": path},
            )
        navigation = self.relationship(head).key
        return (navigation, self.target_column(head, rest).key)

    def navigations_in(self, paths: Iterable[str]) -> list[str]:
        """Navigation properties referenced by the first segment of any path"""
        found: list[str] = []
        for path in paths:
            key = self.navigation_name(path.partition(".")[0])
            if key and key not in found:
                found.append(key)
        return found


user_in_role_fields = EntityFields(
    UserInRole,
    navigations=[
        Navigation("tenant", aliases=("TenantId_Tenant",)),
        Navigation("role", aliases=("RoleId_Role",)),
        Navigation("user", aliases=("UserId_User",)),
        Navigation("created_by_user", aliases=("CreatedBy_User",)),
        Navigation("updated_by_user", aliases=("UpdatedBy_User",)),
    ],
    searchable=["tenant.name", "role.name", "user.name", "user.email"],
)
