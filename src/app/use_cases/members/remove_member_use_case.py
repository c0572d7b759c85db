"""
Remove Member from Tenant Use Case

Deletes a membership while keeping at least one owner per tenant.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.entities import AuditEvent, TenantRole

logger = logging.getLogger(__name__)


class RemoveMemberUseCase:
    """
    Use case for removing members from a tenant.

    Business Rules:
    - Target user must be a member (MEMBERSHIP_NOT_FOUND)
    - The only owner cannot be removed (LAST_OWNER_PROTECTION)
    - Self-removal is not forbidden here; callers apply that policy
    - The membership row is deleted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        tenant_id: UUID,
        user_id: UUID,
        actor_id: Optional[UUID] = None,
    ) -> Result[bool]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id_for_update(tenant_id)
            if tenant is None:
                return Return.err(errors.tenant_not_found())

            membership = await self.uow.memberships.get_by_user_and_tenant(
                user_id, tenant_id
            )
            if membership is None:
                return Return.err(errors.membership_not_found())

            removed_role = membership.role
            if removed_role == TenantRole.owner:
                owners_count = await self.uow.memberships.count_by_role(
                    tenant_id, TenantRole.owner
                )
                if owners_count <= 1:
                    return Return.err(errors.last_owner_protection("remove"))

            await self.uow.memberships.delete(membership)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant_id,
                    user_id=actor_id,
                    action="member_removed",
                    event_metadata={
                        "removed_user_id": str(user_id),
                        "removed_user_role": removed_role.value,
                    },
                )
            )

            await self.uow.commit()

            logger.info(f"User {user_id} removed from tenant {tenant_id}")
            return Return.ok(True)
