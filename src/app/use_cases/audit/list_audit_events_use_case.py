"""
List Audit Events Use Case

Newest-first audit trail of a tenant.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors


class AuditEventResponse(BaseModel):
    """Single audit event"""

    action: str
    user_id: Optional[UUID] = None
    created_at: datetime
    metadata: Dict[str, Any] = {}


class ListAuditEventsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, limit: int = 50
    ) -> Result[List[AuditEventResponse]]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None:
                return Return.err(errors.tenant_not_found())

            events = await self.uow.audit_events.get_by_tenant_id(tenant_id, limit)
            return Return.ok(
                [
                    AuditEventResponse(
                        action=event.action,
                        user_id=event.user_id,
                        created_at=event.created_at,
                        metadata=event.event_metadata or {},
                    )
                    for event in events
                ]
            )
