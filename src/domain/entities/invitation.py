"""
TenantInvitation Entity

Time-boxed, token-addressable offer for an email to join a tenant.
"""

import secrets
from datetime import datetime, timedelta
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from src.domain.base import utcnow

from .enums import InvitationStatus, TenantRole

if TYPE_CHECKING:
    from .tenant import Tenant

TOKEN_LENGTH = 64


class TenantInvitation(SQLModel, table=True):
    """
    TenantInvitation entity - pending/accepted/rejected/expired invitation.

    Business Rules:
    - Status is derived from accepted_at, rejected_at and expires_at
    - At most one pending invitation per (tenant, email); re-inviting
      renews the pending row instead of inserting a new one
    - Accepting or rejecting is terminal and happens once
    - Token is random, URL-safe and unique
    """

    __tablename__ = "tenant_invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    tenant_id: UUID = Field(foreign_key="tenants.id", ondelete="CASCADE", index=True)
    invited_by: UUID = Field(foreign_key="users.id", ondelete="CASCADE")

    email: str = Field(max_length=255, index=True)
    role: TenantRole = Field(default=TenantRole.member, nullable=False)
    token: str = Field(unique=True, index=True, max_length=TOKEN_LENGTH)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    rejected_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, onupdate=utcnow)
    )

    # Relationships
    tenant: "Tenant" = Relationship(back_populates="invitations")

    __table_args__ = (
        Index("idx_tenant_invitation_expires_at", "expires_at"),
        Index("idx_tenant_invitation_tenant_email", "tenant_id", "email"),
    )

    @staticmethod
    def generate_token() -> str:
        # 48 random bytes encode to exactly 64 URL-safe characters
        return secrets.token_urlsafe(48)

    @staticmethod
    def expiry_from(now: datetime, days: int) -> datetime:
        return now + timedelta(days=days)

    def status(self, now: Optional[datetime] = None) -> InvitationStatus:
        if self.accepted_at is not None:
            return InvitationStatus.accepted
        if self.rejected_at is not None:
            return InvitationStatus.rejected
        if self.expires_at > (now or utcnow()):
            return InvitationStatus.pending
        return InvitationStatus.expired

    def is_pending(self, now: Optional[datetime] = None) -> bool:
        return self.status(now) == InvitationStatus.pending

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.status(now) == InvitationStatus.expired

    def is_accepted(self) -> bool:
        return self.accepted_at is not None

    def is_rejected(self) -> bool:
        return self.rejected_at is not None
