"""
Patch Application Module

Applies JSON Patch operations to an entity document. Operation semantics are
those of the jsonpatch library; this module only resolves field paths and
turns failures into ValidationError.
"""

import logging
from typing import Any, Iterable, Sequence, Union

import jsonpatch
from pydantic import ValidationError as PydanticValidationError

from role_admin.common.errors import ValidationError
from role_admin.domain.patch import PatchOperation
from role_admin.query.fields import EntityFields

logger = logging.getLogger(__name__)


def _to_operation(raw: Union[PatchOperation, dict[str, Any]]) -> PatchOperation:
    if isinstance(raw, PatchOperation):
        return raw
    try:
        return PatchOperation.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError(
            message="Invalid patch operation",
            code="invalid_patch",
            details={"errors": e.errors(include_url=False, include_context=False)},
        )


def resolve_patch_path(path: str, fields: EntityFields, settable: Iterable[str]) -> str:
    """
    Resolve an operation path to a JSON pointer on a settable column

    "RoleId", "role_id" and "/role_id" all resolve to "/role_id".

    Raises:
        ValidationError: Path is nested, unknown or not writable
    """
    pointer = path.strip().lstrip("/")
    key = None if "/" in pointer else fields.column_name(pointer)
    if key is None or key not in settable:
        raise ValidationError(
            message=f"Path '{path}' cannot be patched",
            code="invalid_patch_path",
            details={"path": path},
        )
    return f"/{key}"


def apply_patch(
    document: dict[str, Any],
    operations: Sequence[Union[PatchOperation, dict[str, Any]]],
    fields: EntityFields,
    settable: Iterable[str],
) -> dict[str, Any]:
    """
    Apply operations in order to a copy of the document

    Args:
        document: JSON-compatible entity document
        operations: Patch operations
        fields: Field registry used to resolve paths
        settable: Column keys that may be written

    Returns:
        dict: Patched document

    Raises:
        ValidationError: Malformed operation, bad path or conflicting patch
    """
    settable = frozenset(settable)
    resolved = []
    for raw in operations:
        operation = _to_operation(raw)
        resolved.append(operation.to_json_patch(resolve_patch_path(operation.path, fields, settable)))

    try:
        return jsonpatch.JsonPatch(resolved).apply(document)
    except jsonpatch.JsonPatchException as e:
        logger.warning("Patch rejected: %s", e)
        raise ValidationError(
            message=f"Patch could not be applied: {e}",
            code="invalid_patch",
        )
