"""
Invitation Use Cases

Invitation lifecycle: invite, accept, reject, cancel, cleanup, listings.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .cancel_invitation_use_case import CancelInvitationUseCase
from .cleanup_expired_invitations_use_case import CleanupExpiredInvitationsUseCase
from .dtos import InvitationResponse
from .invite_member_use_case import InviteMemberUseCase
from .list_invitations_use_case import ListInvitationsUseCase
from .reject_invitation_use_case import RejectInvitationUseCase

__all__ = [
    "InviteMemberUseCase",
    "AcceptInvitationUseCase",
    "RejectInvitationUseCase",
    "CancelInvitationUseCase",
    "CleanupExpiredInvitationsUseCase",
    "ListInvitationsUseCase",
    "InvitationResponse",
]
