"""
Tenant Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.entities import Tenant


class TenantResponse(BaseModel):
    """Tenant as returned by the tenant management use cases"""

    id: UUID
    name: str
    slug: str
    logo: Optional[str] = None
    is_active: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, tenant: Tenant) -> "TenantResponse":
        return cls(
            id=tenant.id,
            name=tenant.name,
            slug=tenant.slug,
            logo=tenant.logo,
            is_active=tenant.is_active,
            created_at=tenant.created_at,
        )


class UserTenantResponse(BaseModel):
    """Tenant together with the caller's role in it"""

    tenant: TenantResponse
    role: str
    joined_at: Optional[datetime] = None
