"""
Update Member Role Use Case

Changes a member's role while keeping at least one owner per tenant.
"""

import logging
from typing import Optional, Union
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.entities import AuditEvent, TenantRole
from src.domain.errors import InvalidRoleError

logger = logging.getLogger(__name__)


class UpdateMemberRoleUseCase:
    """
    Use case for changing a member's role within a tenant.

    Business Rules:
    - Role must parse to a TenantRole (INVALID_ROLE)
    - Target user must be a member (MEMBERSHIP_NOT_FOUND)
    - Demoting an owner fails when they are the only owner
      (LAST_OWNER_PROTECTION); nothing is written
    - The tenant row is locked before the owner count is read so the
      count and the write are serialized per tenant
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        tenant_id: UUID,
        user_id: UUID,
        new_role: Union[TenantRole, str],
        actor_id: Optional[UUID] = None,
    ) -> Result[bool]:
        """
        Execute update member role use case.

        Args:
            tenant_id: Tenant ID
            user_id: User whose role is being changed
            new_role: New role to assign
            actor_id: User performing the change (audit only)

        Returns:
            Result with True, or Error
        """
        try:
            role = TenantRole.parse(new_role)
        except InvalidRoleError as exc:
            return Return.err(exc.to_error())

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id_for_update(tenant_id)
            if tenant is None:
                return Return.err(errors.tenant_not_found())

            membership = await self.uow.memberships.get_by_user_and_tenant(
                user_id, tenant_id
            )
            if membership is None:
                return Return.err(errors.membership_not_found())

            old_role = membership.role
            if old_role == role:
                return Return.ok(True)

            if old_role == TenantRole.owner:
                owners_count = await self.uow.memberships.count_by_role(
                    tenant_id, TenantRole.owner
                )
                if owners_count <= 1:
                    return Return.err(errors.last_owner_protection("change role of"))

            membership.role = role
            await self.uow.memberships.update(membership)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant_id,
                    user_id=actor_id,
                    action="role_changed",
                    event_metadata={
                        "target_user_id": str(user_id),
                        "old_role": old_role.value,
                        "new_role": role.value,
                    },
                )
            )

            await self.uow.commit()

            logger.info(
                f"Role of user {user_id} in tenant {tenant_id} changed "
                f"from {old_role.value} to {role.value}"
            )
            return Return.ok(True)
