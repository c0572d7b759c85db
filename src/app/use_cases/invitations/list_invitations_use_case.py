"""
List Invitations Use Case

Read-only listings of pending and expired invitations.
"""

from typing import List
from uuid import UUID

from libs.result import Error, Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.base import utcnow
from src.domain.entities import InvitationStatus

from .dtos import InvitationResponse


class ListInvitationsUseCase:
    """Pending/expired invitations of a tenant, or pending ones for an email"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def for_tenant(
        self, tenant_id: UUID, status: InvitationStatus = InvitationStatus.pending
    ) -> Result[List[InvitationResponse]]:
        if status not in (InvitationStatus.pending, InvitationStatus.expired):
            return Return.err(
                Error("INVALID_STATUS", "Only pending or expired invitations can be listed")
            )

        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None:
                return Return.err(errors.tenant_not_found())

            now = utcnow()
            if status == InvitationStatus.pending:
                invitations = await self.uow.invitations.get_pending_by_tenant_id(
                    tenant_id, now
                )
            else:
                invitations = await self.uow.invitations.get_expired_by_tenant_id(
                    tenant_id, now
                )

            return Return.ok(
                [InvitationResponse.from_entity(inv, now) for inv in invitations]
            )

    async def for_email(self, email: str) -> Result[List[InvitationResponse]]:
        async with self.uow:
            now = utcnow()
            invitations = await self.uow.invitations.get_pending_by_email(email, now)
            return Return.ok(
                [InvitationResponse.from_entity(inv, now) for inv in invitations]
            )
