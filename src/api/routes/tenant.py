from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, EmailStr, Field

from libs.result import Error
from src.api.error import ClientError, forbidden, raise_for_error
from src.api.utils.params import parse_uuid
from src.app.services.access_gate import AccessGate, Identity
from src.app.services.tenant_invitation_service import TenantInvitationService
from src.app.use_cases.invitations import InvitationResponse
from src.app.use_cases.members import MemberResponse
from src.app.use_cases.tenants import TenantResponse, UserTenantResponse
from src.domain.entities import InvitationStatus, TenantRole
from src.depends import (
    get_access_gate,
    get_current_identity,
    get_tenant_invitation_service,
)

router = APIRouter(prefix="/tenants", tags=["Tenant"])


class CreateTenantRequest(BaseModel):
    """
    Create tenant HTTP request payload

    The caller becomes the first owner of the new tenant.
    """

    name: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    logo: Optional[str] = Field(None, max_length=2048)


class UpdateTenantRequest(BaseModel):
    """Partial tenant update; omitted fields are left unchanged"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    logo: Optional[str] = Field(None, max_length=2048)
    is_active: Optional[bool] = None


class ChangeRoleRequest(BaseModel):
    role: str = Field(..., description="New role (owner, admin, member, viewer)")


class InviteMemberRequest(BaseModel):
    """
    Invite member HTTP request payload

    Re-inviting an email with a pending invitation renews that invitation.
    """

    email: EmailStr = Field(..., description="Email address of the invitee")
    role: str = Field(
        TenantRole.member.value, description="Role granted on acceptance"
    )


class ActionResponse(BaseModel):
    success: bool
    message: str


async def _require(
    gate: AccessGate, identity: Identity, ability: str, check
) -> None:
    if not await gate.allows(identity, ability, check):
        raise forbidden()


# Tenants


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TenantResponse)
async def create_tenant(
    request: CreateTenantRequest,
    identity: Identity = Depends(get_current_identity),
    gate: AccessGate = Depends(get_access_gate),
    service: TenantInvitationService = Depends(get_tenant_invitation_service),
):
    """
    Create Tenant

    Only callers admitted to the admin panel may create tenants.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: FORBIDDEN (no panel access)
        - 409 Conflict: SLUG_ALREADY_EXISTS
    """
    if not gate.can_access_panel(identity):
        raise forbidden("Admin panel access required", code="FORBIDDEN")

    result = await service.create_tenant(
        name=request.name,
        slug=request.slug,
        logo=request.logo,
        owner_id=identity.id,
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=List[UserTenantResponse])
async def list_my_tenants(
    identity: Identity = Depends(get_current_identity),
    service: TenantInvitationService = Depends(get_tenant_invitation_service),
):
    """List the tenants the caller belongs to, with the caller's role in each"""
    result = await service.list_tenants_for_user(identity.id)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch(
    "/{tenant_id}", status_code=status.HTTP_200_OK, response_model=TenantResponse
)
async def update_tenant(
    tenant_id: str,
    request: UpdateTenantRequest,
    identity: Identity = Depends(get_current_identity),
    gate: AccessGate = Depends(get_access_gate),
    service: TenantInvitationService = Depends(get_tenant_invitation_service),
):
    """
    Update Tenant

    Raises:
        - 400 Bad Request: Invalid tenant_id format
        - 403 Forbidden: INSUFFICIENT_ROLE (owner or admin required)
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: SLUG_ALREADY_EXISTS
    """
    tenant_uuid = parse_uuid(tenant_id, "INVALID_TENANT_ID", "tenant ID")

    await _require(
        gate,
        identity,
        "update_tenant",
        lambda: service.can_manage_members_in_tenant(identity.id, tenant_uuid),
    )

    result = await service.update_tenant(
        tenant_uuid,
        name=request.name,
        slug=request.slug,
        logo=request.logo,
        is_active=request.is_active,
        actor_id=identity.id,
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{tenant_id}", status_code=status.HTTP_200_OK, response_model=ActionResponse
)
async def delete_tenant(
    tenant_id: str,
    identity: Identity = Depends(get_current_identity),
    gate: AccessGate = Depends(get_access_gate),
    service: TenantInvitationService = Depends(get_tenant_invitation_service),
):
    """
    Delete Tenant

    Removes the tenant with all of its memberships and invitations.
    Only owners may delete a tenant.

    Raises:
        - 400 Bad Request: Invalid tenant_id format
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: TENANT_NOT_FOUND
    """
    tenant_uuid = parse_uuid(tenant_id, "INVALID_TENANT_ID", "tenant ID")

    await _require(
        gate,
        identity,
        "delete_tenant",
        lambda: service.is_owner_of_tenant(identity.id, tenant_uuid),
    )

    result = await service.delete_tenant(tenant_uuid, actor_id=identity.id)
    if result.is_err():
        raise_for_error(result.error)

    return ActionResponse(success=True, message="Tenant deleted")


# Members


@router.get(
    "/{tenant_id}/members",
    status_code=status.HTTP_200_OK,
    response_model=List[MemberResponse],
)
async def list_members(
    tenant_id: str,
    identity: Identity = Depends(get_current_identity),
    gate: AccessGate = Depends(get_access_gate),
    service: TenantInvitationService = Depends(get_tenant_invitation_service),
):
    """
    List Members

    Any member of the tenant may list its members.

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE (not a member)
        - 404 Not Found: TENANT_NOT_FOUND
    """
    tenant_uuid = parse_uuid(tenant_id, "INVALID_TENANT_ID", "tenant ID")

    async def is_member() -> bool:
        return await service.get_role_in_tenant(identity.id, tenant_uuid) is not None

    await _require(gate, identity, "view_members", is_member)

    result = await service.list_members(tenant_uuid)
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.put(
    "/{tenant_id}/members/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=ActionResponse,
)
async def change_member_role(
    tenant_id: str,
    user_id: str,
    request: ChangeRoleRequest,
    identity: Identity = Depends(get_current_identity),
    gate: AccessGate = Depends(get_access_gate),
    service: TenantInvitationService = Depends(get_tenant_invitation_service),
):
    """
    Change Member Role

    Raises:
        - 400 Bad Request: INVALID_ROLE, invalid id format
        - 403 Forbidden: INSUFFICIENT_ROLE (owner or admin required)
        - 404 Not Found: TENANT_NOT_FOUND, MEMBERSHIP_NOT_FOUND
        - 409 Conflict: LAST_OWNER_PROTECTION
    """
    tenant_uuid = parse_uuid(tenant_id, "INVALID_TENANT_ID", "tenant ID")
    user_uuid = parse_uuid(user_id, "INVALID_USER_ID", "user ID")

    await _require(
        gate,
        identity,
        "manage_members",
        lambda: service.can_manage_members_in_tenant(identity.id, tenant_uuid),
    )

    result = await service.update_member_role(
        tenant_uuid, user_uuid, request.role, actor_id=identity.id
    )
    if result.is_err():
        raise_for_error(result.error)

    return ActionResponse(success=True, message=f"Role changed to {request.role}")


@router.delete(
    "/{tenant_id}/members/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=ActionResponse,
)
async def remove_member(
    tenant_id: str,
    user_id: str,
    identity: Identity = Depends(get_current_identity),
    gate: AccessGate = Depends(get_access_gate),
    service: TenantInvitationService = Depends(get_tenant_invitation_service),
):
    """
    Remove Member

    Raises:
        - 400 Bad Request: Invalid id format
        - 403 Forbidden: CANNOT_REMOVE_SELF, INSUFFICIENT_ROLE
        - 404 Not Found: TENANT_NOT_FOUND, MEMBERSHIP_NOT_FOUND
        - 409 Conflict: LAST_OWNER_PROTECTION
    """
    tenant_uuid = parse_uuid(tenant_id, "INVALID_TENANT_ID", "tenant ID")
    user_uuid = parse_uuid(user_id, "INVALID_USER_ID", "user ID")

    if user_uuid == identity.id:
        raise ClientError(
            Error("CANNOT_REMOVE_SELF", "You cannot remove yourself from a tenant"),
            status_code=status.HTTP_403_FORBIDDEN,
        )

    await _require(
        gate,
        identity,
        "manage_members",
        lambda: service.can_manage_members_in_tenant(identity.id, tenant_uuid),
    )

    result = await service.remove_member(tenant_uuid, user_uuid, actor_id=identity.id)
    if result.is_err():
        raise_for_error(result.error)

    return ActionResponse(success=True, message="Member removed")


# Invitations


@router.post(
    "/{tenant_id}/invitations",
    status_code=status.HTTP_201_CREATED,
    response_model=InvitationResponse,
)
async def invite_member(
    tenant_id: str,
    request: InviteMemberRequest,
    identity: Identity = Depends(get_current_identity),
    gate: AccessGate = Depends(get_access_gate),
    service: TenantInvitationService = Depends(get_tenant_invitation_service),
):
    """
    Invite Member

    Raises:
        - 400 Bad Request: INVALID_ROLE, invalid tenant_id format
        - 403 Forbidden: INSUFFICIENT_ROLE, TENANT_INACTIVE
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: ALREADY_MEMBER
    """
    tenant_uuid = parse_uuid(tenant_id, "INVALID_TENANT_ID", "tenant ID")

    await _require(
        gate,
        identity,
        "invite_members",
        lambda: service.can_manage_members_in_tenant(identity.id, tenant_uuid),
    )

    result = await service.invite(
        tenant_uuid, request.email, invited_by=identity.id, role=request.role
    )
    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/{tenant_id}/invitations",
    status_code=status.HTTP_200_OK,
    response_model=List[InvitationResponse],
)
async def list_invitations(
    tenant_id: str,
    status_filter: InvitationStatus = Query(InvitationStatus.pending, alias="status"),
    identity: Identity = Depends(get_current_identity),
    gate: AccessGate = Depends(get_access_gate),
    service: TenantInvitationService = Depends(get_tenant_invitation_service),
):
    """
    List Invitations

    Query Parameters:
        - status: pending (default) or expired

    Raises:
        - 400 Bad Request: INVALID_STATUS
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: TENANT_NOT_FOUND
    """
    tenant_uuid = parse_uuid(tenant_id, "INVALID_TENANT_ID", "tenant ID")

    await _require(
        gate,
        identity,
        "view_invitations",
        lambda: service.can_manage_members_in_tenant(identity.id, tenant_uuid),
    )

    if status_filter == InvitationStatus.expired:
        result = await service.list_expired_invitations(tenant_uuid)
    elif status_filter == InvitationStatus.pending:
        result = await service.list_pending_invitations(tenant_uuid)
    else:
        raise ClientError(
            Error("INVALID_STATUS", "Only pending or expired invitations can be listed"),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{tenant_id}/invitations/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=ActionResponse,
)
async def cancel_invitation(
    tenant_id: str,
    invitation_id: str,
    identity: Identity = Depends(get_current_identity),
    gate: AccessGate = Depends(get_access_gate),
    service: TenantInvitationService = Depends(get_tenant_invitation_service),
):
    """
    Cancel Invitation

    Raises:
        - 400 Bad Request: Invalid id format
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: INVITATION_NOT_FOUND
        - 409 Conflict: NOT_CANCELLABLE
    """
    tenant_uuid = parse_uuid(tenant_id, "INVALID_TENANT_ID", "tenant ID")
    invitation_uuid = parse_uuid(invitation_id, "INVALID_INVITATION_ID", "invitation ID")

    await _require(
        gate,
        identity,
        "cancel_invitations",
        lambda: service.can_manage_members_in_tenant(identity.id, tenant_uuid),
    )

    result = await service.cancel_invitation(
        invitation_uuid, actor_id=identity.id, tenant_id=tenant_uuid
    )
    if result.is_err():
        raise_for_error(result.error)

    return ActionResponse(success=True, message="Invitation cancelled")
