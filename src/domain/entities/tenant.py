"""
Tenant Entity

Represents an organizational unit that owns members and invitations.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from src.domain.base import utcnow

if TYPE_CHECKING:
    from .invitation import TenantInvitation
    from .membership import Membership


class Tenant(SQLModel, table=True):
    """
    Tenant entity - organizational unit.

    Business Rules:
    - slug is unique and URL-safe, checked at creation and update
    - is_active=False blocks new invitations and acceptances
    - Never auto-deleted; deletion cascades to memberships and invitations
    """

    __tablename__ = "tenants"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    slug: str = Field(unique=True, index=True, max_length=255)
    logo: Optional[str] = Field(default=None, max_length=2048)

    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime, onupdate=utcnow)
    )

    # Relationships (rows removed by ON DELETE CASCADE, never loaded for deletes)
    memberships: list["Membership"] = Relationship(
        back_populates="tenant", sa_relationship_kwargs={"passive_deletes": True}
    )
    invitations: list["TenantInvitation"] = Relationship(
        back_populates="tenant", sa_relationship_kwargs={"passive_deletes": True}
    )

    __table_args__ = (Index("idx_tenant_is_active", "is_active"),)
