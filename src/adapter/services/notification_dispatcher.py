import logging

from src.app.services.notification_dispatcher import (
    INotificationDispatcher,
    InvitationNotification,
)

logger = logging.getLogger(__name__)


class LoggingNotificationDispatcher(INotificationDispatcher):
    """
    Dispatcher that records the intent to notify in the service log.

    Stands in for a mail or queue integration; the token is never logged.
    """

    def __init__(self, tenant_display_name: str = "Organization"):
        self.tenant_display_name = tenant_display_name

    async def send_invitation(self, notification: InvitationNotification) -> None:
        logger.info(
            f"Invitation {notification.invitation_id} "
            f"{'re-sent' if notification.renewed else 'sent'} to {notification.email}: "
            f"join {self.tenant_display_name} '{notification.tenant_name}' "
            f"as {notification.role} (expires {notification.expires_at.isoformat()})"
        )
