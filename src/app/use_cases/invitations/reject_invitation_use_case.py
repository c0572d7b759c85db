"""
Reject Invitation Use Case

Declines a pending invitation, with or without a signed-in user.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.base import normalize_email, utcnow
from src.domain.entities import AuditEvent

logger = logging.getLogger(__name__)


class RejectInvitationUseCase:
    """
    Use case for rejecting a tenant invitation.

    Business Rules:
    - Only a pending invitation can be rejected (INVITATION_NOT_FOUND)
    - Anonymous rejection by token alone is allowed (decline links)
    - When a user is given, their email must match (EMAIL_MISMATCH)
    - Rejection is terminal
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str, user_id: Optional[UUID] = None) -> Result[bool]:
        async with self.uow:
            user = None
            if user_id is not None:
                user = await self.uow.users.get_by_id(user_id)
                if user is None:
                    return Return.err(errors.user_not_found())

            now = utcnow()
            invitation = await self.uow.invitations.get_pending_by_token(
                token, now, for_update=True
            )
            if invitation is None:
                return Return.err(errors.invitation_not_found())

            if user is not None and normalize_email(user.email) != invitation.email:
                return Return.err(errors.email_mismatch())

            invitation.rejected_at = now
            await self.uow.invitations.update(invitation)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=invitation.tenant_id,
                    user_id=user_id,
                    action="invitation_rejected",
                    event_metadata={"invitation_id": str(invitation.id)},
                )
            )

            await self.uow.commit()

            logger.info(f"Invitation {invitation.id} rejected")
            return Return.ok(True)
