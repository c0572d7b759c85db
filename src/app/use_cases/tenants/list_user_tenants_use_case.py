"""
List User Tenants Use Case
"""

from typing import List
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

from .dtos import TenantResponse, UserTenantResponse


class ListUserTenantsUseCase:
    """Tenants a user belongs to, with the user's role in each"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[List[UserTenantResponse]]:
        async with self.uow:
            memberships = await self.uow.memberships.get_by_user_id(user_id)
            memberships_by_tenant = {m.tenant_id: m for m in memberships}
            tenants = await self.uow.tenants.get_by_ids(list(memberships_by_tenant))

            return Return.ok(
                [
                    UserTenantResponse(
                        tenant=TenantResponse.from_entity(tenant),
                        role=memberships_by_tenant[tenant.id].role.value,
                        joined_at=memberships_by_tenant[tenant.id].joined_at,
                    )
                    for tenant in tenants
                ]
            )
