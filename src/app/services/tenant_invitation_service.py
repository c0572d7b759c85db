"""
Tenant Invitation Service

Single entry point for the tenant membership and invitation lifecycle,
consumed by the HTTP API and the CLI. Each operation runs one use case
inside the unit of work and returns a Result.
"""

from typing import List, Optional, Union
from uuid import UUID

from libs.result import Result
from src.app.services.access_gate import Identity
from src.app.services.notification_dispatcher import INotificationDispatcher
from src.app.services.tenancy_config import TenancyConfig
from src.app.services.tenant_locks import TenantLocks
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.audit import AuditEventResponse, ListAuditEventsUseCase
from src.app.use_cases.invitations import (
    AcceptInvitationUseCase,
    CancelInvitationUseCase,
    CleanupExpiredInvitationsUseCase,
    InvitationResponse,
    InviteMemberUseCase,
    ListInvitationsUseCase,
    RejectInvitationUseCase,
)
from src.app.use_cases.members import (
    MemberResponse,
    MembershipQueries,
    RemoveMemberUseCase,
    UpdateMemberRoleUseCase,
)
from src.app.use_cases.tenants import (
    CreateTenantUseCase,
    DeleteTenantUseCase,
    ListUserTenantsUseCase,
    TenantResponse,
    UpdateTenantUseCase,
    UserTenantResponse,
)
from src.app.use_cases.users import LoadIdentityUseCase, RegisterUserUseCase
from src.domain.entities import InvitationStatus, TenantRole


class TenantInvitationService:
    def __init__(
        self,
        uow: UnitOfWork,
        config: TenancyConfig,
        notifier: INotificationDispatcher,
        locks: Optional[TenantLocks] = None,
    ):
        self.uow = uow
        self.config = config
        self.notifier = notifier
        self.locks = locks or TenantLocks()

    # Invitations

    async def invite(
        self,
        tenant_id: UUID,
        email: str,
        invited_by: UUID,
        role: Union[TenantRole, str] = TenantRole.member,
    ) -> Result[InvitationResponse]:
        use_case = InviteMemberUseCase(self.uow, self.config, self.notifier)
        async with self.locks.hold(tenant_id):
            return await use_case.execute(tenant_id, email, invited_by, role)

    async def accept(self, token: str, user_id: UUID) -> Result[bool]:
        async with self.locks.hold(token):
            return await AcceptInvitationUseCase(self.uow, self.config).execute(
                token, user_id
            )

    async def reject(self, token: str, user_id: Optional[UUID] = None) -> Result[bool]:
        async with self.locks.hold(token):
            return await RejectInvitationUseCase(self.uow).execute(token, user_id)

    async def cancel_invitation(
        self,
        invitation_id: UUID,
        actor_id: Optional[UUID] = None,
        tenant_id: Optional[UUID] = None,
    ) -> Result[bool]:
        return await CancelInvitationUseCase(self.uow).execute(
            invitation_id, actor_id, tenant_id
        )

    async def cleanup_expired_invitations(self) -> Result[int]:
        return await CleanupExpiredInvitationsUseCase(self.uow).execute()

    async def list_pending_invitations(
        self, tenant_id: UUID
    ) -> Result[List[InvitationResponse]]:
        return await ListInvitationsUseCase(self.uow).for_tenant(
            tenant_id, InvitationStatus.pending
        )

    async def list_expired_invitations(
        self, tenant_id: UUID
    ) -> Result[List[InvitationResponse]]:
        return await ListInvitationsUseCase(self.uow).for_tenant(
            tenant_id, InvitationStatus.expired
        )

    async def list_pending_invitations_for_email(
        self, email: str
    ) -> Result[List[InvitationResponse]]:
        return await ListInvitationsUseCase(self.uow).for_email(email)

    # Members

    async def update_member_role(
        self,
        tenant_id: UUID,
        user_id: UUID,
        new_role: Union[TenantRole, str],
        actor_id: Optional[UUID] = None,
    ) -> Result[bool]:
        async with self.locks.hold(tenant_id):
            return await UpdateMemberRoleUseCase(self.uow).execute(
                tenant_id, user_id, new_role, actor_id
            )

    async def remove_member(
        self, tenant_id: UUID, user_id: UUID, actor_id: Optional[UUID] = None
    ) -> Result[bool]:
        async with self.locks.hold(tenant_id):
            return await RemoveMemberUseCase(self.uow).execute(tenant_id, user_id, actor_id)

    async def list_members(self, tenant_id: UUID) -> Result[List[MemberResponse]]:
        return await MembershipQueries(self.uow).list_members(tenant_id)

    async def get_role_in_tenant(
        self, user_id: UUID, tenant_id: UUID
    ) -> Optional[TenantRole]:
        return await MembershipQueries(self.uow).get_role_in_tenant(user_id, tenant_id)

    async def has_role_in_tenant(
        self, user_id: UUID, tenant_id: UUID, role: Union[TenantRole, str]
    ) -> bool:
        return await MembershipQueries(self.uow).has_role_in_tenant(user_id, tenant_id, role)

    async def is_owner_of_tenant(self, user_id: UUID, tenant_id: UUID) -> bool:
        return await MembershipQueries(self.uow).is_owner_of_tenant(user_id, tenant_id)

    async def can_manage_members_in_tenant(self, user_id: UUID, tenant_id: UUID) -> bool:
        return await MembershipQueries(self.uow).can_manage_members_in_tenant(
            user_id, tenant_id
        )

    # Tenants

    async def create_tenant(
        self,
        name: str,
        slug: Optional[str] = None,
        logo: Optional[str] = None,
        is_active: bool = True,
        owner_id: Optional[UUID] = None,
    ) -> Result[TenantResponse]:
        return await CreateTenantUseCase(self.uow).execute(
            name, slug, logo, is_active, owner_id
        )

    async def update_tenant(
        self,
        tenant_id: UUID,
        name: Optional[str] = None,
        slug: Optional[str] = None,
        logo: Optional[str] = None,
        is_active: Optional[bool] = None,
        actor_id: Optional[UUID] = None,
    ) -> Result[TenantResponse]:
        return await UpdateTenantUseCase(self.uow).execute(
            tenant_id, name, slug, logo, is_active, actor_id
        )

    async def delete_tenant(
        self, tenant_id: UUID, actor_id: Optional[UUID] = None
    ) -> Result[bool]:
        async with self.locks.hold(tenant_id):
            return await DeleteTenantUseCase(self.uow).execute(tenant_id, actor_id)

    async def list_tenants_for_user(self, user_id: UUID) -> Result[List[UserTenantResponse]]:
        return await ListUserTenantsUseCase(self.uow).execute(user_id)

    async def list_audit_events(
        self, tenant_id: UUID, limit: int = 50
    ) -> Result[List[AuditEventResponse]]:
        return await ListAuditEventsUseCase(self.uow).execute(tenant_id, limit)

    async def load_identity(self, user_id: UUID) -> Result[Identity]:
        return await LoadIdentityUseCase(self.uow).execute(user_id)

    async def register_user(
        self, email: str, name: Optional[str] = None, roles: Optional[List[str]] = None
    ) -> Result[Identity]:
        return await RegisterUserUseCase(self.uow).execute(email, name, roles)
