"""
Audit API Routes

Handles audit event retrieval endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from src.api.error import forbidden, raise_for_error
from src.api.utils.params import parse_uuid
from src.app.services.access_gate import AccessGate, Identity
from src.app.services.tenant_invitation_service import TenantInvitationService
from src.app.use_cases.audit import AuditEventResponse
from src.depends import get_access_gate, get_current_identity, get_tenant_invitation_service

router = APIRouter(prefix="/tenants", tags=["Audit"])


@router.get(
    "/{tenant_id}/audit-events",
    status_code=status.HTTP_200_OK,
    response_model=List[AuditEventResponse],
)
async def get_audit_events(
    tenant_id: str,
    identity: Identity = Depends(get_current_identity),
    gate: AccessGate = Depends(get_access_gate),
    service: TenantInvitationService = Depends(get_tenant_invitation_service),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
):
    """
    Get Tenant Audit Events

    Returns membership and invitation audit logs for the tenant, newest
    first. Only accessible by admin and owner roles.

    Raises:
        - 400 Bad Request: Invalid tenant_id format
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: TENANT_NOT_FOUND
    """
    tenant_uuid = parse_uuid(tenant_id, "INVALID_TENANT_ID", "tenant ID")

    allowed = await gate.allows(
        identity,
        "view_audit_events",
        lambda: service.can_manage_members_in_tenant(identity.id, tenant_uuid),
    )
    if not allowed:
        raise forbidden()

    result = await service.list_audit_events(tenant_uuid, limit)
    if result.is_err():
        raise_for_error(result.error)

    return result.value
