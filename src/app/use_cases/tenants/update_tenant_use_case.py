"""
Update Tenant Use Case
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.entities import AuditEvent
from src.domain.slug import generate_slug

from .dtos import TenantResponse

logger = logging.getLogger(__name__)


class UpdateTenantUseCase:
    """
    Use case for updating tenant attributes.

    Business Rules:
    - Only the given fields change
    - A new slug must be unique among other tenants (SLUG_ALREADY_EXISTS)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        tenant_id: UUID,
        name: Optional[str] = None,
        slug: Optional[str] = None,
        logo: Optional[str] = None,
        is_active: Optional[bool] = None,
        actor_id: Optional[UUID] = None,
    ) -> Result[TenantResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None:
                return Return.err(errors.tenant_not_found())

            changes = {}

            if slug is not None:
                slug = generate_slug(slug)
                if slug != tenant.slug:
                    existing = await self.uow.tenants.get_by_slug(slug)
                    if existing is not None and existing.id != tenant.id:
                        return Return.err(errors.slug_already_exists(slug))
                    changes["slug"] = slug

            if name is not None and name != tenant.name:
                changes["name"] = name
            if logo is not None and logo != tenant.logo:
                changes["logo"] = logo
            if is_active is not None and is_active != tenant.is_active:
                changes["is_active"] = is_active

            if not changes:
                return Return.ok(TenantResponse.from_entity(tenant))

            for field, value in changes.items():
                setattr(tenant, field, value)
            tenant = await self.uow.tenants.update(tenant)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant.id,
                    user_id=actor_id,
                    action="tenant_updated",
                    event_metadata={"changed": sorted(changes)},
                )
            )

            await self.uow.commit()

            logger.info(f"Tenant {tenant.id} updated: {sorted(changes)}")
            return Return.ok(TenantResponse.from_entity(tenant))
