"""
Membership Entity

Links User to Tenant with a role (the user_tenant pivot).
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from src.domain.base import utcnow

from .enums import TenantRole

if TYPE_CHECKING:
    from .tenant import Tenant


class Membership(SQLModel, table=True):
    """
    Membership entity - links User to Tenant with a role.

    Business Rules:
    - (user_id, tenant_id) is unique: one role per user per tenant
    - A tenant with members always keeps at least one owner
    - invited_by is a weak reference kept for display (SET NULL on delete)
    """

    __tablename__ = "user_tenant"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    tenant_id: UUID = Field(foreign_key="tenants.id", ondelete="CASCADE", index=True)

    role: TenantRole = Field(default=TenantRole.member, nullable=False)

    invited_by: Optional[UUID] = Field(
        default=None, foreign_key="users.id", ondelete="SET NULL", nullable=True
    )
    invited_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    joined_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, onupdate=utcnow)
    )

    # Relationships
    tenant: "Tenant" = Relationship(back_populates="memberships")

    __table_args__ = (
        Index("idx_user_tenant_user_tenant", "user_id", "tenant_id", unique=True),
        Index("idx_user_tenant_role", "role"),
    )
