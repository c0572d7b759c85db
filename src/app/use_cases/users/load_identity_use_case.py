"""
Load Identity Use Case

Resolves the user id from the bearer token into the caller's identity.
"""

from uuid import UUID

from libs.result import Result, Return
from src.app.services.access_gate import Identity
from src.app.services.unit_of_work import UnitOfWork
from src.domain import errors


class LoadIdentityUseCase:
    """
    Use case for loading the current caller.

    Business Rules:
    - JWT payload provides user_id
    - User must exist (USER_NOT_FOUND)
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> Result[Identity]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(errors.user_not_found())

            return Return.ok(
                Identity(
                    id=user.id,
                    email=user.email,
                    name=user.name,
                    roles=list(user.roles or []),
                )
            )
