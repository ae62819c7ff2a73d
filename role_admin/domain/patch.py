"""
Patch Operation Domain Model

One JSON Patch (RFC 6902) operation restricted to add / replace / remove.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class PatchOperation(BaseModel):
    """Partial update operation on a single field"""

    op: Literal["add", "replace", "remove"] = Field(..., description="Operation")
    # "/role_id", "role_id" or "RoleId"
    path: str = Field(..., min_length=1, description="Target field path")
    value: Any = Field(None, description="New value (ignored by remove)")

    model_config = ConfigDict(extra="ignore")

    def to_json_patch(self, path: str) -> dict[str, Any]:
        """Render as a jsonpatch operation dict against a resolved pointer"""
        operation: dict[str, Any] = {"op": self.op, "path": path}
        if self.op != "remove":
            operation["value"] = self.value
        return operation
