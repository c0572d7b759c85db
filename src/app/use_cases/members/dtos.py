"""
Member Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import TenantRole


class MemberResponse(BaseModel):
    """Membership row joined with the member's identity"""

    user_id: UUID
    email: Optional[str] = None
    name: Optional[str] = None
    role: str
    invited_by: Optional[UUID] = None
    invited_at: Optional[datetime] = None
    joined_at: Optional[datetime] = None


class RoleCapabilities(BaseModel):
    """A user's role in one tenant with the capabilities it grants"""

    tenant_id: UUID
    role: Optional[str] = None
    label: Optional[str] = None
    permissions: List[str] = []
    can_invite_members: bool = False
    can_manage_members: bool = False
    can_delete_tenant: bool = False

    @classmethod
    def for_role(cls, tenant_id: UUID, role: Optional[TenantRole]) -> "RoleCapabilities":
        if role is None:
            return cls(tenant_id=tenant_id)
        return cls(
            tenant_id=tenant_id,
            role=role.value,
            label=role.label,
            permissions=role.permissions(),
            can_invite_members=role.can_invite_members(),
            can_manage_members=role.can_manage_members(),
            can_delete_tenant=role.can_delete_tenant(),
        )
