from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class InvitationNotification(BaseModel):
    """Everything a delivery channel needs to tell an invitee about an invitation"""

    invitation_id: UUID
    tenant_id: UUID
    tenant_name: str
    email: str
    role: str
    token: str
    expires_at: datetime
    renewed: bool = False


class INotificationDispatcher(ABC):
    """
    Out-of-band delivery of invitation notifications - application layer

    Called only after the invitation row is committed. Failures are logged
    by the caller and never undo the invitation.
    """

    @abstractmethod
    async def send_invitation(self, notification: InvitationNotification) -> None:
        pass
