"""
Cleanup Expired Invitations Use Case

Scheduled sweep removing invitations that expired without an answer.
"""

import logging

from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow

logger = logging.getLogger(__name__)


class CleanupExpiredInvitationsUseCase:
    """
    Use case for deleting expired invitations.

    Business Rules:
    - Deletes exactly the invitations that are neither accepted nor
      rejected and whose expires_at is not in the future
    - Idempotent: a second run right after deletes nothing
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[int]:
        async with self.uow:
            deleted = await self.uow.invitations.delete_expired(utcnow())
            await self.uow.commit()

        logger.info(f"Expired invitation cleanup removed {deleted} invitation(s)")
        return Return.ok(deleted)
