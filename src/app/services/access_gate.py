"""
Access Gate

Coarse authorization consulted before any service call:
- super-admin bypass for every ability check
- panel admission (role allow-list, then email-domain fallback)
"""

import logging
from typing import Awaitable, Callable, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.app.services.tenancy_config import TenancyConfig

logger = logging.getLogger(__name__)


class Identity(BaseModel):
    """Already-authenticated caller as supplied by the identity provider"""

    id: UUID
    email: str
    name: Optional[str] = None
    roles: List[str] = Field(default_factory=list)

    def has_any_role(self, roles: List[str]) -> bool:
        return any(role in self.roles for role in roles)


class AccessGate:
    def __init__(self, config: TenancyConfig):
        self.config = config

    def is_super_admin(self, identity: Identity) -> bool:
        return identity.has_any_role(self.config.super_admin_roles)

    def before(self, identity: Identity, ability: str) -> Optional[bool]:
        """True short-circuits the decision; None defers to the specific check"""
        if self.is_super_admin(identity):
            return True
        return None

    async def allows(
        self,
        identity: Identity,
        ability: str,
        check: Callable[[], Awaitable[bool]],
    ) -> bool:
        """
        Evaluate one authorization decision.

        The bypass is consulted exactly once, before the specific check, and
        the check is skipped entirely for super-admins.
        """
        if self.before(identity, ability):
            logger.info(f"Super-admin bypass for {ability} by user {identity.id}")
            return True
        return bool(await check())

    def can_access_panel(self, identity: Identity) -> bool:
        if self.config.admin_panel_roles and identity.has_any_role(
            self.config.admin_panel_roles
        ):
            return True

        email = identity.email.strip().lower()
        for domain in self.config.allowed_email_domains:
            if email.endswith(f"@{domain.lower()}"):
                return True

        return False
