"""
Register User Use Case

Mirrors an identity from the external identity provider into the users
table so it can be invited, join tenants and authenticate with a token.
"""

import logging
from typing import List, Optional

from libs.result import Result, Return
from src.app.services.access_gate import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors
from src.domain.base import normalize_email
from src.domain.entities import User

logger = logging.getLogger(__name__)


class RegisterUserUseCase:
    """
    Business Rules:
    - Email is stored normalized and must be unique (USER_ALREADY_EXISTS)
    - roles are global role names (super-admin, panel access), not tenant roles
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, email: str, name: Optional[str] = None, roles: Optional[List[str]] = None
    ) -> Result[Identity]:
        email = normalize_email(email)

        async with self.uow:
            if await self.uow.users.get_by_email(email):
                return Return.err(errors.user_already_exists(email))

            user = await self.uow.users.create(
                User(email=email, name=name, roles=list(roles or []))
            )
            await self.uow.commit()

            logger.info(f"User {user.id} registered ({email})")
            return Return.ok(
                Identity(id=user.id, email=user.email, name=user.name, roles=user.roles)
            )
