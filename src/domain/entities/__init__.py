"""
Tenant IAM Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import InvitationStatus, TenantRole

# Export all entities
from .user import User
from .tenant import Tenant
from .membership import Membership
from .invitation import TenantInvitation
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "TenantRole",
    "InvitationStatus",
    # Entities
    "User",
    "Tenant",
    "Membership",
    "TenantInvitation",
    "AuditEvent",
]
