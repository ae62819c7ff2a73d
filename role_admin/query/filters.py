"""
Filter Service Module

Composes FilterCriteria and a free-text search term into WHERE clauses on a
SQLAlchemy select, independent of the entity's shape.

Supported operators (legacy spellings accepted, case- and underscore-insensitive):
- eq / Equal
- ne / NotEqual
- gt / GreaterThan
- gte / GreaterThanOrEqual
- lt / LessThan
- lte / LessThanOrEqual
- contains, not_contains, starts_with, ends_with: Case-insensitive text match
- in, not_in: List (or comma-separated string) membership
- is_null, is_not_null
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from sqlalchemy import Select, String, cast, func, or_
from sqlalchemy.sql.elements import ColumnElement

from role_admin.common.errors import ValidationError
from role_admin.domain.filter import FilterCriteria
from role_admin.query.fields import EntityFields, normalize_name

logger = logging.getLogger(__name__)


_OPERATORS = {
    "eq": "eq",
    "equal": "eq",
    "equals": "eq",
    "ne": "ne",
    "notequal": "ne",
    "gt": "gt",
    "greaterthan": "gt",
    "gte": "gte",
    "greaterthanorequal": "gte",
    "lt": "lt",
    "lessthan": "lt",
    "lte": "lte",
    "lessthanorequal": "lte",
    "contains": "contains",
    "like": "contains",
    "notcontains": "not_contains",
    "startswith": "starts_with",
    "endswith": "ends_with",
    "in": "in",
    "notin": "not_in",
    "isnull": "is_null",
    "isnotnull": "is_not_null",
}

_TEXT_PATTERNS = {
    "contains": "%{}%",
    "not_contains": "%{}%",
    "starts_with": "{}%",
    "ends_with": "%{}",
}

_TRUE_VALUES = {"true", "1", "yes", "y", "on"}
_FALSE_VALUES = {"false", "0", "no", "n", "off"}


def _python_type(column) -> Optional[type]:
    try:
        return column.type.python_type
    except NotImplementedError:
        return None


def _invalid_value(column, value: Any) -> ValidationError:
    return ValidationError(
        message=f"Invalid value {value!r} for field '{column.key}'",
        code="invalid_filter_value",
        details={"field": column.key},
    )


def coerce_value(column, value: Any) -> Any:
    """
    Convert a filter value to the column's Python type

    Datetimes are compared as naive UTC, matching how they are stored.

    Raises:
        ValidationError: Value cannot be converted
    """
    if value is None:
        return None
    python_type = _python_type(column)
    if python_type is None:
        return value
    try:
        if python_type is datetime:
            dt = value if isinstance(value, datetime) else datetime.fromisoformat(str(value))
            if dt.tzinfo is not None:
                dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
            return dt
        if isinstance(value, python_type):
            return value
        if python_type is uuid.UUID:
            return uuid.UUID(str(value))
        if python_type is bool:
            text = str(value).strip().lower()
            if text in _TRUE_VALUES:
                return True
            if text in _FALSE_VALUES:
                return False
            raise ValueError(value)
        return python_type(value)
    except (TypeError, ValueError):
        raise _invalid_value(column, value)


class FilterService:
    """
    Filter Service

    Applies filter criteria and a search term to a select over the registry's entity.
    """

    def __init__(self, fields: EntityFields):
        """
        Initialize Service

        Args:
            fields: Field registry of the filtered entity
        """
        self.fields = fields

    def apply_filter(
        self,
        stmt: Select,
        filters: Optional[Sequence[FilterCriteria]] = None,
        search_term: Optional[str] = "",
    ) -> Select:
        """
        Restrict a select by criteria (AND) and a search term

        Args:
            stmt: Select over the registry's entity
            filters: Filter criteria
            search_term: Free text matched against the searchable fields (OR)

        Returns:
            Select: Filtered select
        """
        for criteria in filters or []:
            stmt = stmt.where(
                self.build_clause(criteria.property_name, criteria.operator, criteria.value)
            )

        term = (search_term or "").strip()
        if term and self.fields.searchable:
            stmt = stmt.where(
                or_(*(self.build_clause(path, "contains", term) for path in self.fields.searchable))
            )
        return stmt

    def build_clause(self, property_name: str, operator: str, value: Any) -> ColumnElement:
        """
        Build one predicate

        A dotted property ("role.name") is matched through an EXISTS on the
        navigation property.

        Raises:
            ValidationError: Unknown property, operator or value
        """
        op = _OPERATORS.get(normalize_name(operator or ""))
        if op is None:
            logger.warning("Rejected filter operator %r on %r", operator, property_name)
            raise ValidationError(
                message=f"Unsupported filter operator '{operator}'",
                code="invalid_filter_operator",
                details={"operator": operator},
            )

        head, _, rest = property_name.strip().partition(".")
        if rest:
            navigation = self.fields.relationship(head)
            column = self.fields.target_column(head, rest)
            return navigation.has(self._compare(column, op, value))
        return self._compare(self.fields.column(property_name), op, value)

    def _compare(self, column, op: str, value: Any) -> ColumnElement:
        """Predicate for a single column"""
        if op == "is_null":
            return column.is_(None)
        if op == "is_not_null":
            return column.is_not(None)

        if op in _TEXT_PATTERNS:
            text = "" if value is None else str(value)
            if _python_type(column) is str:
                target = column
            elif _python_type(column) is uuid.UUID:
                # Backends render UUIDs with or without dashes; match on bare hex
                target = func.replace(cast(column, String), "-", "")
                text = text.replace("-", "")
            else:
                target = cast(column, String)
            clause = target.ilike(_TEXT_PATTERNS[op].format(text))
            return ~clause if op == "not_contains" else clause

        if op in ("in", "not_in"):
            if isinstance(value, (list, tuple, set)):
                items = list(value)
            else:
                items = [item.strip() for item in str(value or "").split(",") if item.strip()]
            coerced = [coerce_value(column, item) for item in items]
            return column.in_(coerced) if op == "in" else column.not_in(coerced)

        coerced = coerce_value(column, value)
        if op == "eq":
            return column.is_(None) if coerced is None else column == coerced
        if op == "ne":
            return column.is_not(None) if coerced is None else column != coerced

        if coerced is None:
            raise _invalid_value(column, value)
        if op == "gt":
            return column > coerced
        if op == "gte":
            return column >= coerced
        if op == "lt":
            return column < coerced
        return column <= coerced
