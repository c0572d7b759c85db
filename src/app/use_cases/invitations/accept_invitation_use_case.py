"""
Accept Invitation Use Case

Turns a pending invitation into a membership.
"""

import logging
from uuid import UUID

from libs.result import Result, Return
from src.app.services.tenancy_config import TenancyConfig
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.base import normalize_email, utcnow
from src.domain.entities import AuditEvent, Membership

logger = logging.getLogger(__name__)


class AcceptInvitationUseCase:
    """
    Use case for accepting a tenant invitation.

    Business Rules:
    - Only a pending invitation can be accepted; accepted, rejected and
      expired ones report INVITATION_NOT_FOUND (first writer wins)
    - The accepting user's email must match the invitation (EMAIL_MISMATCH)
    - Membership creation and accepted_at are committed together
    - The invitation row is locked so concurrent accepts serialize
    """

    def __init__(self, uow: UnitOfWork, config: TenancyConfig):
        self.uow = uow
        self.config = config

    async def execute(self, token: str, user_id: UUID) -> Result[bool]:
        """
        Execute accept invitation use case.

        Args:
            token: Invitation token from the out-of-band link
            user_id: Authenticated user accepting the invitation

        Returns:
            Result with True, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(errors.user_not_found())

            now = utcnow()
            invitation = await self.uow.invitations.get_pending_by_token(
                token, now, for_update=True
            )
            if invitation is None:
                return Return.err(errors.invitation_not_found())

            if normalize_email(user.email) != invitation.email:
                return Return.err(errors.email_mismatch())

            tenant = await self.uow.tenants.get_by_id(invitation.tenant_id)
            if tenant is None:
                return Return.err(errors.tenant_not_found())

            if not tenant.is_active and self.config.block_inactive_tenants:
                return Return.err(errors.tenant_inactive())

            existing_membership = await self.uow.memberships.get_by_user_and_tenant(
                user.id, tenant.id
            )
            if existing_membership:
                return Return.err(errors.already_member())

            await self.uow.memberships.create(
                Membership(
                    user_id=user.id,
                    tenant_id=tenant.id,
                    role=invitation.role,
                    invited_by=invitation.invited_by,
                    invited_at=invitation.created_at,
                    joined_at=now,
                )
            )

            invitation.accepted_at = now
            await self.uow.invitations.update(invitation)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant.id,
                    user_id=user.id,
                    action="invitation_accepted",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "role": invitation.role.value,
                    },
                )
            )

            await self.uow.commit()

            logger.info(
                f"User {user.id} joined tenant {tenant.id} as {invitation.role.value}"
            )
            return Return.ok(True)
