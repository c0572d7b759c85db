"""
Delete Tenant Use Case

Hard-deletes a tenant together with its memberships and invitations.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.entities import AuditEvent

logger = logging.getLogger(__name__)


class DeleteTenantUseCase:
    """
    Use case for deleting a tenant.

    Business Rules:
    - Memberships and invitations go with the tenant, in one transaction
    - The audit event keeps the tenant id after the row is gone
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, actor_id: Optional[UUID] = None
    ) -> Result[bool]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id_for_update(tenant_id)
            if tenant is None:
                return Return.err(errors.tenant_not_found())

            slug = tenant.slug
            invitations_deleted = await self.uow.invitations.delete_by_tenant_id(tenant_id)
            memberships_deleted = await self.uow.memberships.delete_by_tenant_id(tenant_id)
            await self.uow.tenants.delete(tenant)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant_id,
                    user_id=actor_id,
                    action="tenant_deleted",
                    event_metadata={
                        "slug": slug,
                        "memberships_deleted": memberships_deleted,
                        "invitations_deleted": invitations_deleted,
                    },
                )
            )

            await self.uow.commit()

            logger.info(
                f"Tenant {tenant_id} deleted with {memberships_deleted} membership(s) "
                f"and {invitations_deleted} invitation(s)"
            )
            return Return.ok(True)
