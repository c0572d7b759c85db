from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from src.domain.entities import Tenant


class ITenantRepository(ABC):
    """Tenant repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID"""
        pass

    @abstractmethod
    async def get_by_id_for_update(self, tenant_id: UUID) -> Optional[Tenant]:
        """
        Get tenant by ID and lock its row until the transaction ends.

        Serializes membership mutations of the same tenant.
        """
        pass

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Tenant]:
        """Get tenant by slug"""
        pass

    @abstractmethod
    async def get_by_ids(self, tenant_ids: List[UUID]) -> List[Tenant]:
        """Get tenants by a list of IDs"""
        pass

    @abstractmethod
    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant"""
        pass

    @abstractmethod
    async def update(self, tenant: Tenant) -> Tenant:
        """Update existing tenant"""
        pass

    @abstractmethod
    async def delete(self, tenant: Tenant) -> None:
        """Delete tenant (memberships and invitations cascade)"""
        pass
