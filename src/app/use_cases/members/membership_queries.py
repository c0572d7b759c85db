"""
Membership Queries

Read-only lookups over the membership store. "Not a member" is an
ordinary answer (None/False), never an error.
"""

from typing import List, Optional, Union
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.entities import TenantRole

from .dtos import MemberResponse


class MembershipQueries:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def get_role_in_tenant(
        self, user_id: UUID, tenant_id: UUID
    ) -> Optional[TenantRole]:
        async with self.uow:
            membership = await self.uow.memberships.get_by_user_and_tenant(
                user_id, tenant_id
            )
            return membership.role if membership else None

    async def has_role_in_tenant(
        self, user_id: UUID, tenant_id: UUID, role: Union[TenantRole, str]
    ) -> bool:
        return await self.get_role_in_tenant(user_id, tenant_id) == TenantRole.parse(role)

    async def is_owner_of_tenant(self, user_id: UUID, tenant_id: UUID) -> bool:
        return await self.has_role_in_tenant(user_id, tenant_id, TenantRole.owner)

    async def can_manage_members_in_tenant(self, user_id: UUID, tenant_id: UUID) -> bool:
        role = await self.get_role_in_tenant(user_id, tenant_id)
        return role is not None and role.can_manage_members()

    async def list_members(self, tenant_id: UUID) -> Result[List[MemberResponse]]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None:
                return Return.err(errors.tenant_not_found())

            memberships = await self.uow.memberships.get_by_tenant_id(tenant_id)
            users = await self.uow.users.get_by_ids([m.user_id for m in memberships])
            users_by_id = {user.id: user for user in users}

            members = []
            for membership in memberships:
                user = users_by_id.get(membership.user_id)
                members.append(
                    MemberResponse(
                        user_id=membership.user_id,
                        email=user.email if user else None,
                        name=user.name if user else None,
                        role=membership.role.value,
                        invited_by=membership.invited_by,
                        invited_at=membership.invited_at,
                        joined_at=membership.joined_at,
                    )
                )
            return Return.ok(members)
