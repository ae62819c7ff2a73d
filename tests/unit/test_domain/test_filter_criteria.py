"""
Filter criteria parsing unit tests
"""

import pytest

from role_admin.common.errors import ValidationError
from role_admin.domain.filter import FilterCriteria, parse_filters


def test_blank_input_gives_no_filters():
    assert parse_filters(None) == []
    assert parse_filters("  ") == []


def test_legacy_shape():
    filters = parse_filters('[{"PropertyName": "RoleId", "Operator": "Equal", "Value": "abc"}]')
    assert filters == [FilterCriteria(property_name="RoleId", operator="Equal", value="abc")]


def test_snake_case_shape_and_default_operator():
    filters = parse_filters('[{"property_name": "tenant_id", "value": null}]')
    assert filters[0].property_name == "tenant_id"
    assert filters[0].operator == "eq"
    assert filters[0].value is None


def test_single_object_is_accepted():
    filters = parse_filters('{"PropertyName": "UserId_User.Name", "Operator": "contains", "Value": "al"}')
    assert len(filters) == 1
    assert filters[0].property_name == "UserId_User.Name"


def test_malformed_json():
    with pytest.raises(ValidationError) as exc:
        parse_filters("[{")
    assert exc.value.code == "invalid_filter"


def test_missing_property_name():
    with pytest.raises(ValidationError) as exc:
        parse_filters('[{"Operator": "eq", "Value": 1}]')
    assert exc.value.code == "invalid_filter"
    assert exc.value.details["errors"]
