"""
Cancel Invitation Use Case

Deletes a pending invitation.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.base import utcnow
from src.domain.entities import AuditEvent

logger = logging.getLogger(__name__)


class CancelInvitationUseCase:
    """
    Use case for cancelling an invitation.

    Business Rules:
    - Unknown invitation: INVITATION_NOT_FOUND
    - Only pending invitations can be cancelled (NOT_CANCELLABLE)
    - Cancelling deletes the row
    - When tenant_id is given, invitations of other tenants are not found
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        invitation_id: UUID,
        actor_id: Optional[UUID] = None,
        tenant_id: Optional[UUID] = None,
    ) -> Result[bool]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None or (
                tenant_id is not None and invitation.tenant_id != tenant_id
            ):
                return Return.err(errors.invitation_not_found())

            if not invitation.is_pending(utcnow()):
                return Return.err(errors.not_cancellable())

            invitation_tenant_id = invitation.tenant_id
            email = invitation.email
            await self.uow.invitations.delete(invitation)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=invitation_tenant_id,
                    user_id=actor_id,
                    action="invitation_cancelled",
                    event_metadata={
                        "invitation_id": str(invitation_id),
                        "email": email,
                    },
                )
            )

            await self.uow.commit()

            logger.info(f"Invitation {invitation_id} cancelled")
            return Return.ok(True)
