from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invitation_repository import IInvitationRepository
from src.domain.base import normalize_email
from src.domain.entities import TenantInvitation


def _pending(now: datetime):
    return (
        TenantInvitation.accepted_at.is_(None),
        TenantInvitation.rejected_at.is_(None),
        TenantInvitation.expires_at > now,
    )


def _expired(now: datetime):
    return (
        TenantInvitation.accepted_at.is_(None),
        TenantInvitation.rejected_at.is_(None),
        TenantInvitation.expires_at <= now,
    )


class InvitationRepository(IInvitationRepository):
    """TenantInvitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[TenantInvitation]:
        """Get invitation by ID"""
        stmt = select(TenantInvitation).where(TenantInvitation.id == invitation_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_pending_by_token(
        self, token: str, now: datetime, for_update: bool = False
    ) -> Optional[TenantInvitation]:
        """Get pending invitation by token"""
        stmt = select(TenantInvitation).where(
            TenantInvitation.token == token, *_pending(now)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_pending_by_tenant_and_email(
        self, tenant_id: UUID, email: str, now: datetime
    ) -> Optional[TenantInvitation]:
        """Get pending invitation by tenant and email"""
        stmt = select(TenantInvitation).where(
            TenantInvitation.tenant_id == tenant_id,
            TenantInvitation.email == normalize_email(email),
            *_pending(now),
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_pending_by_tenant_id(
        self, tenant_id: UUID, now: datetime
    ) -> List[TenantInvitation]:
        """Get pending invitations for a tenant"""
        stmt = (
            select(TenantInvitation)
            .where(TenantInvitation.tenant_id == tenant_id, *_pending(now))
            .order_by(TenantInvitation.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_expired_by_tenant_id(
        self, tenant_id: UUID, now: datetime
    ) -> List[TenantInvitation]:
        """Get expired invitations for a tenant"""
        stmt = (
            select(TenantInvitation)
            .where(TenantInvitation.tenant_id == tenant_id, *_expired(now))
            .order_by(TenantInvitation.expires_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_pending_by_email(
        self, email: str, now: datetime
    ) -> List[TenantInvitation]:
        """Get pending invitations addressed to an email"""
        stmt = (
            select(TenantInvitation)
            .where(TenantInvitation.email == normalize_email(email), *_pending(now))
            .order_by(TenantInvitation.created_at)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, invitation: TenantInvitation) -> TenantInvitation:
        """Create a new invitation"""
        invitation.email = normalize_email(invitation.email)
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def update(self, invitation: TenantInvitation) -> TenantInvitation:
        """Update existing invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def delete(self, invitation: TenantInvitation) -> None:
        """Delete invitation"""
        await self.session.delete(invitation)
        await self.session.flush()

    async def delete_expired(self, now: datetime) -> int:
        """Bulk-delete every expired invitation"""
        stmt = delete(TenantInvitation).where(*_expired(now))
        result = await self.session.execute(stmt)
        return result.rowcount

    async def delete_by_tenant_id(self, tenant_id: UUID) -> int:
        """Delete all invitations of a tenant"""
        stmt = delete(TenantInvitation).where(TenantInvitation.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.rowcount
