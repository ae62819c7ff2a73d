"""
Field Projection Module

Shapes an entity into a dict holding only the requested fields.
"""

from typing import Any, Optional

from pydantic_core import to_jsonable_python

from role_admin.query.fields import EntityFields


def split_fields(fields: Optional[str]) -> list[str]:
    """Split a comma-separated field list, dropping blanks"""
    if not fields:
        return []
    return [field.strip() for field in fields.split(",") if field.strip()]


class FieldMapper:
    """
    Field Mapper

    Builds projections keyed by canonical field names, with nested dicts for
    navigation paths:

        map_to_fields(entity, "Id,RoleId_Role.Name")
        -> {"id": "...", "role": {"name": "Admin"}}

    Values are reduced to JSON-compatible primitives.
    """

    def __init__(self, fields: EntityFields):
        self.fields = fields

    def resolve(self, fields: Optional[str]) -> list[tuple[str, ...]]:
        """
        Resolve a field list to canonical paths, in order and without duplicates

        Raises:
            ValidationError: Unknown field
        """
        paths: list[tuple[str, ...]] = []
        for field in split_fields(fields):
            path = self.fields.resolve_path(field)
            if path not in paths:
                paths.append(path)
        return paths

    def map_to_fields(self, entity: Any, fields: Optional[str]) -> dict[str, Any]:
        """
        Project an entity onto the requested fields

        Args:
            entity: Domain object (or None)
            fields: Comma-separated field list

        Returns:
            dict: Projection, empty when entity is None
        """
        paths = self.resolve(fields)
        if entity is None:
            return {}

        projection: dict[str, Any] = {}
        for path in paths:
            head = path[0]
            value = getattr(entity, head, None)
            if len(path) == 1:
                projection[head] = to_jsonable_python(value)
                continue
            if value is None:
                projection.setdefault(head, None)
                continue
            nested = projection.get(head)
            if not isinstance(nested, dict):
                nested = projection[head] = {}
            nested[path[1]] = to_jsonable_python(getattr(value, path[1], None))
        return projection
