"""
UserInRole Domain Model

Defines UserInRole related Data Transfer Objects (DTOs).
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from role_admin.common.time import ensure_utc


class _NavigationRef(BaseModel):
    """Related row attached to a loaded navigation property"""

    id: UUID
    created_on: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_on", mode="after")
    @classmethod
    def _as_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)


class TenantRef(_NavigationRef):
    """Tenant attached when the tenant navigation is loaded"""

    name: str


class RoleRef(_NavigationRef):
    """Role attached when the role navigation is loaded"""

    tenant_id: Optional[UUID] = None
    name: str
    description: Optional[str] = None


class UserRef(_NavigationRef):
    """User attached when a user navigation is loaded"""

    tenant_id: Optional[UUID] = None
    name: str
    email: Optional[str] = None


class UserInRoleBase(BaseModel):
    """UserInRole Base Model (settable fields)"""

    # Tenant the assignment belongs to
    tenant_id: Optional[UUID] = Field(None, description="Tenant ID")
    # Assigned role
    role_id: UUID = Field(..., description="Role ID")
    # Assigned user
    user_id: UUID = Field(..., description="User ID")
    # Audit fields
    created_by: Optional[UUID] = Field(None, description="Created By (User ID)")
    updated_by: Optional[UUID] = Field(None, description="Updated By (User ID)")


# Columns a create, update or patch may write
SETTABLE_FIELDS = frozenset(UserInRoleBase.model_fields)


class UserInRoleCreate(UserInRoleBase):
    """Create UserInRole Request Model

    A caller supplied id is accepted but ignored; the store generates one.
    """

    id: Optional[UUID] = Field(None, description="Ignored on create")


class UserInRoleUpdate(UserInRoleBase):
    """Update UserInRole Request Model (full replace)"""

    id: Optional[UUID] = Field(None, description="Must match the targeted id when given")


class UserInRole(UserInRoleBase):
    """UserInRole Complete Model"""

    id: UUID = Field(..., description="UserInRole ID")
    created_on: datetime = Field(..., description="Creation Time")
    updated_on: Optional[datetime] = Field(None, description="Update Time")

    # Navigation properties, None unless loaded
    tenant: Optional[TenantRef] = None
    role: Optional[RoleRef] = None
    user: Optional[UserRef] = None
    created_by_user: Optional[UserRef] = None
    updated_by_user: Optional[UserRef] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_on", "updated_on", mode="after")
    @classmethod
    def _as_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)
