from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import TenantInvitation


class IInvitationRepository(ABC):
    """
    TenantInvitation repository interface - application layer

    "Pending" and "expired" follow TenantInvitation.status(): neither
    accepted nor rejected, with expires_at after (pending) or at/before
    (expired) the given ``now``.
    """

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[TenantInvitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_pending_by_token(
        self, token: str, now: datetime, for_update: bool = False
    ) -> Optional[TenantInvitation]:
        """Get pending invitation by token, optionally locking the row"""
        pass

    @abstractmethod
    async def get_pending_by_tenant_and_email(
        self, tenant_id: UUID, email: str, now: datetime
    ) -> Optional[TenantInvitation]:
        """Get pending invitation by tenant and email"""
        pass

    @abstractmethod
    async def get_pending_by_tenant_id(
        self, tenant_id: UUID, now: datetime
    ) -> List[TenantInvitation]:
        """Get pending invitations for a tenant"""
        pass

    @abstractmethod
    async def get_expired_by_tenant_id(
        self, tenant_id: UUID, now: datetime
    ) -> List[TenantInvitation]:
        """Get expired invitations for a tenant"""
        pass

    @abstractmethod
    async def get_pending_by_email(
        self, email: str, now: datetime
    ) -> List[TenantInvitation]:
        """Get pending invitations addressed to an email"""
        pass

    @abstractmethod
    async def create(self, invitation: TenantInvitation) -> TenantInvitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def update(self, invitation: TenantInvitation) -> TenantInvitation:
        """Update existing invitation"""
        pass

    @abstractmethod
    async def delete(self, invitation: TenantInvitation) -> None:
        """Delete invitation"""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Bulk-delete every expired invitation, returns count"""
        pass

    @abstractmethod
    async def delete_by_tenant_id(self, tenant_id: UUID) -> int:
        """Delete all invitations of a tenant, returns count"""
        pass
