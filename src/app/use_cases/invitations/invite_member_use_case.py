"""
Invite Member Use Case

Creates or renews the pending invitation for an email in a tenant.
"""

import logging
from typing import Union
from uuid import UUID

from libs.result import Result, Return
from src.app.services.notification_dispatcher import (
    INotificationDispatcher,
    InvitationNotification,
)
from src.app.services.tenancy_config import TenancyConfig
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.base import normalize_email, utcnow
from src.domain.entities import AuditEvent, TenantInvitation, TenantRole
from src.domain.errors import InvalidRoleError

from .dtos import InvitationResponse

logger = logging.getLogger(__name__)


class InviteMemberUseCase:
    """
    Use case for inviting an email address to join a tenant.

    Business Rules:
    - Role must parse to a TenantRole (INVALID_ROLE)
    - Existing members cannot be invited (ALREADY_MEMBER)
    - At most one pending invitation per (tenant, email): an existing
      pending invitation is renewed in place with a fresh token, the new
      role and inviter, and a reset expiry
    - Invitations expire after the configured window (7 days by default)
    - The notification is attempted only after the row is committed, and
      its failure never fails the invitation
    """

    def __init__(
        self,
        uow: UnitOfWork,
        config: TenancyConfig,
        notifier: INotificationDispatcher,
    ):
        self.uow = uow
        self.config = config
        self.notifier = notifier

    async def execute(
        self,
        tenant_id: UUID,
        email: str,
        invited_by: UUID,
        role: Union[TenantRole, str] = TenantRole.member,
    ) -> Result[InvitationResponse]:
        """
        Execute invite member use case.

        Args:
            tenant_id: Target tenant ID
            email: Email address to invite (validated upstream)
            invited_by: User ID of the person sending the invite
            role: Role the invitee receives on acceptance

        Returns:
            Result with the created or renewed InvitationResponse, or Error
        """
        try:
            invitation_role = TenantRole.parse(role)
        except InvalidRoleError as exc:
            return Return.err(exc.to_error())

        email = normalize_email(email)

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id_for_update(tenant_id)
            if tenant is None:
                return Return.err(errors.tenant_not_found())

            if not tenant.is_active and self.config.block_inactive_tenants:
                return Return.err(errors.tenant_inactive())

            inviter = await self.uow.users.get_by_id(invited_by)
            if inviter is None:
                return Return.err(errors.user_not_found())

            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                existing_membership = await self.uow.memberships.get_by_user_and_tenant(
                    existing_user.id, tenant_id
                )
                if existing_membership:
                    return Return.err(errors.already_member())

            now = utcnow()
            expires_at = TenantInvitation.expiry_from(
                now, self.config.invitation_expiry_days
            )

            invitation = await self.uow.invitations.get_pending_by_tenant_and_email(
                tenant_id, email, now
            )
            renewed = invitation is not None

            if renewed:
                invitation.role = invitation_role
                invitation.invited_by = invited_by
                invitation.token = TenantInvitation.generate_token()
                invitation.expires_at = expires_at
                invitation = await self.uow.invitations.update(invitation)
            else:
                invitation = await self.uow.invitations.create(
                    TenantInvitation(
                        tenant_id=tenant_id,
                        invited_by=invited_by,
                        email=email,
                        role=invitation_role,
                        token=TenantInvitation.generate_token(),
                        expires_at=expires_at,
                    )
                )

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant_id,
                    user_id=invited_by,
                    action="invitation_renewed" if renewed else "invitation_sent",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "invited_email": email,
                        "role": invitation_role.value,
                    },
                )
            )

            await self.uow.commit()

            response = InvitationResponse.from_entity(invitation, now)
            notification = InvitationNotification(
                invitation_id=invitation.id,
                tenant_id=tenant.id,
                tenant_name=tenant.name,
                email=email,
                role=invitation_role.value,
                token=invitation.token,
                expires_at=invitation.expires_at,
                renewed=renewed,
            )

        logger.info(
            f"Invitation {response.id} {'renewed' if renewed else 'created'} "
            f"for tenant {tenant_id} (role={invitation_role.value})"
        )

        try:
            await self.notifier.send_invitation(notification)
        except Exception:
            logger.exception(f"Failed to dispatch notification for invitation {response.id}")

        return Return.ok(response)
