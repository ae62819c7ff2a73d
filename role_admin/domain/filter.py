"""
Filter Criteria Domain Model

A list of criteria restricts a list query conjunctively. The legacy wire shape
is accepted as well:

    [{"PropertyName": "RoleId", "Operator": "Equal", "Value": "..."}]
"""

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from role_admin.common.errors import ValidationError


class FilterCriteria(BaseModel):
    """Single predicate: property, operator and value"""

    # Field path, e.g. "role_id", "RoleId" or "RoleId_Role.Name"
    property_name: str = Field(..., min_length=1, alias="PropertyName")
    # Operator name, e.g. "eq" or "Equal"
    operator: str = Field("eq", alias="Operator")
    value: Any = Field(None, alias="Value")

    model_config = ConfigDict(populate_by_name=True)


_criteria_list = TypeAdapter(list[FilterCriteria])


def parse_filters(raw: Optional[str]) -> list[FilterCriteria]:
    """
    Decode a JSON array of filter criteria

    Args:
        raw: JSON text, as carried in a query string

    Returns:
        list[FilterCriteria]: Parsed criteria, empty for blank input

    Raises:
        ValidationError: Malformed JSON or criteria
    """
    if raw is None or not raw.strip():
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(
            message=f"Filters are not valid JSON: {e.msg}",
            code="invalid_filter",
        )
    if isinstance(data, dict):
        data = [data]
    try:
        return _criteria_list.validate_python(data)
    except PydanticValidationError as e:
        raise ValidationError(
            message="Invalid filter criteria",
            code="invalid_filter",
            details={"errors": e.errors(include_url=False, include_context=False)},
        )
