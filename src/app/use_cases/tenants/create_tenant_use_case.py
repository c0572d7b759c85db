"""
Create Tenant Use Case

Creates a tenant and, optionally, its first owner membership.
"""

import logging
from typing import Optional
from uuid import UUID

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.base import utcnow
from src.domain.entities import AuditEvent, Membership, Tenant, TenantRole
from src.domain.slug import generate_slug

from .dtos import TenantResponse

logger = logging.getLogger(__name__)


class CreateTenantUseCase:
    """
    Use case for creating a tenant.

    Business Rules:
    - slug defaults to a slug of the name and must be unique
      (SLUG_ALREADY_EXISTS)
    - When owner_id is given the owner membership is created in the same
      transaction; otherwise assigning an owner is the caller's job
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        name: str,
        slug: Optional[str] = None,
        logo: Optional[str] = None,
        is_active: bool = True,
        owner_id: Optional[UUID] = None,
    ) -> Result[TenantResponse]:
        slug = generate_slug(slug or name)

        async with self.uow:
            if await self.uow.tenants.get_by_slug(slug):
                return Return.err(errors.slug_already_exists(slug))

            if owner_id is not None:
                owner = await self.uow.users.get_by_id(owner_id)
                if owner is None:
                    return Return.err(errors.user_not_found())

            tenant = await self.uow.tenants.create(
                Tenant(name=name, slug=slug, logo=logo, is_active=is_active)
            )

            if owner_id is not None:
                await self.uow.memberships.create(
                    Membership(
                        user_id=owner_id,
                        tenant_id=tenant.id,
                        role=TenantRole.owner,
                        joined_at=utcnow(),
                    )
                )

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant.id,
                    user_id=owner_id,
                    action="tenant_created",
                    event_metadata={"slug": slug},
                )
            )

            await self.uow.commit()

            logger.info(f"Tenant {tenant.id} created (slug={slug})")
            return Return.ok(TenantResponse.from_entity(tenant))
