from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.access_gate import Identity
from src.app.services.tenant_invitation_service import TenantInvitationService
from src.app.use_cases.invitations import InvitationResponse
from src.depends import (
    get_current_identity,
    get_current_user,
    get_optional_user,
    get_tenant_invitation_service,
)

router = APIRouter(prefix="/invitations", tags=["Invitations"])


class InvitationTokenRequest(BaseModel):
    """Accept/reject invitation HTTP request payload"""

    token: str = Field(..., min_length=1, description="Invitation token")


class InvitationActionResponse(BaseModel):
    success: bool
    message: str


@router.post(
    "/accept",
    status_code=status.HTTP_200_OK,
    response_model=InvitationActionResponse,
)
async def accept_invitation(
    request: InvitationTokenRequest,
    user_id: UUID = Depends(get_current_user),
    service: TenantInvitationService = Depends(get_tenant_invitation_service),
):
    """
    Accept Invitation

    The authenticated caller joins the tenant with the invited role.
    The caller's email must match the invitation.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: EMAIL_MISMATCH, TENANT_INACTIVE
        - 404 Not Found: INVITATION_NOT_FOUND, USER_NOT_FOUND
        - 409 Conflict: ALREADY_MEMBER
    """
    result = await service.accept(request.token, user_id)
    if result.is_err():
        raise_for_error(result.error)

    return InvitationActionResponse(success=True, message="Invitation accepted")


@router.post(
    "/reject",
    status_code=status.HTTP_200_OK,
    response_model=InvitationActionResponse,
)
async def reject_invitation(
    request: InvitationTokenRequest,
    user_id: Optional[UUID] = Depends(get_optional_user),
    service: TenantInvitationService = Depends(get_tenant_invitation_service),
):
    """
    Reject Invitation

    Possession of the token is enough; when a bearer token is sent the
    caller's email must also match the invitation.

    Raises:
        - 403 Forbidden: EMAIL_MISMATCH
        - 404 Not Found: INVITATION_NOT_FOUND, USER_NOT_FOUND
    """
    result = await service.reject(request.token, user_id)
    if result.is_err():
        raise_for_error(result.error)

    return InvitationActionResponse(success=True, message="Invitation rejected")


@router.get(
    "/mine",
    status_code=status.HTTP_200_OK,
    response_model=List[InvitationResponse],
)
async def list_my_invitations(
    identity: Identity = Depends(get_current_identity),
    service: TenantInvitationService = Depends(get_tenant_invitation_service),
):
    """Pending invitations addressed to the caller's email"""
    result = await service.list_pending_invitations_for_email(identity.email)
    if result.is_err():
        raise_for_error(result.error)

    return result.value
