"""
Invitation Use Case DTOs (Data Transfer Objects)

Response classes for the invitation lifecycle.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import TenantInvitation


class InvitationResponse(BaseModel):
    """Invitation as returned by invite and the listing queries"""

    id: UUID
    tenant_id: UUID
    email: str
    role: str
    status: str
    token: str
    invited_by: UUID
    expires_at: datetime
    accepted_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_entity(
        cls, invitation: TenantInvitation, now: Optional[datetime] = None
    ) -> "InvitationResponse":
        return cls(
            id=invitation.id,
            tenant_id=invitation.tenant_id,
            email=invitation.email,
            role=invitation.role.value,
            status=invitation.status(now).value,
            token=invitation.token,
            invited_by=invitation.invited_by,
            expires_at=invitation.expires_at,
            accepted_at=invitation.accepted_at,
            rejected_at=invitation.rejected_at,
            created_at=invitation.created_at,
        )
