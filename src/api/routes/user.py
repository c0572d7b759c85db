from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from src.api.utils.params import parse_uuid
from src.app.services.access_gate import AccessGate, Identity
from src.app.services.tenant_invitation_service import TenantInvitationService
from src.app.use_cases.members import RoleCapabilities
from src.depends import get_access_gate, get_current_identity, get_tenant_invitation_service

router = APIRouter(prefix="/me", tags=["User"])


class MeResponse(BaseModel):
    """GET /me response payload"""

    id: UUID
    email: str
    name: Optional[str]
    roles: List[str]
    is_super_admin: bool
    can_access_panel: bool


@router.get("", status_code=status.HTTP_200_OK, response_model=MeResponse)
async def get_me(
    identity: Identity = Depends(get_current_identity),
    gate: AccessGate = Depends(get_access_gate),
):
    return MeResponse(
        id=identity.id,
        email=identity.email,
        name=identity.name,
        roles=identity.roles,
        is_super_admin=gate.is_super_admin(identity),
        can_access_panel=gate.can_access_panel(identity),
    )


@router.get(
    "/tenants/{tenant_id}/role",
    status_code=status.HTTP_200_OK,
    response_model=RoleCapabilities,
)
async def get_my_role(
    tenant_id: str,
    identity: Identity = Depends(get_current_identity),
    service: TenantInvitationService = Depends(get_tenant_invitation_service),
):
    """
    Caller's role in a tenant and what it allows.

    Non-members get an empty role rather than an error.
    """
    tenant_uuid = parse_uuid(tenant_id, "INVALID_TENANT_ID", "tenant ID")
    role = await service.get_role_in_tenant(identity.id, tenant_uuid)
    return RoleCapabilities.for_role(tenant_uuid, role)
