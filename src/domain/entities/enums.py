"""
IAM Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum
from typing import Dict, List, Union

from src.domain.errors import InvalidRoleError


class TenantRole(str, Enum):
    """
    User role within a tenant, ordered by privilege: owner > admin > member > viewer.

    permissions() is advisory metadata for presentation layers. Member
    management is decided by can_manage_members(), which treats owner and
    admin identically.
    """

    owner = "owner"
    admin = "admin"
    member = "member"
    viewer = "viewer"

    @classmethod
    def parse(cls, raw: Union["TenantRole", str]) -> "TenantRole":
        """Strict parsing: unknown values raise InvalidRoleError, never a default"""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(raw)
        except ValueError:
            raise InvalidRoleError(raw) from None

    @classmethod
    def select_options(cls) -> Dict[str, str]:
        return {role.value: role.label for role in cls}

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def outranks(self, other: "TenantRole") -> bool:
        return self.rank > other.rank

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    def permissions(self) -> List[str]:
        return list(_PERMISSIONS[self])

    def can_invite_members(self) -> bool:
        return self in (TenantRole.owner, TenantRole.admin)

    def can_manage_members(self) -> bool:
        return self in (TenantRole.owner, TenantRole.admin)

    def can_delete_tenant(self) -> bool:
        return self is TenantRole.owner


_RANKS = {
    TenantRole.owner: 4,
    TenantRole.admin: 3,
    TenantRole.member: 2,
    TenantRole.viewer: 1,
}

_DESCRIPTIONS = {
    TenantRole.owner: "Full access to all tenant features including member management and deletion",
    TenantRole.admin: "Manage tenant settings and invite members",
    TenantRole.member: "Standard access to tenant resources",
    TenantRole.viewer: "Read-only access to tenant resources",
}

_PERMISSIONS = {
    TenantRole.owner: (
        "tenant.view",
        "tenant.update",
        "tenant.delete",
        "tenant.members.view",
        "tenant.members.invite",
        "tenant.members.update",
        "tenant.members.remove",
    ),
    TenantRole.admin: (
        "tenant.view",
        "tenant.update",
        "tenant.members.view",
        "tenant.members.invite",
        "tenant.members.update",
    ),
    TenantRole.member: (
        "tenant.view",
        "tenant.members.view",
    ),
    TenantRole.viewer: ("tenant.view",),
}


class InvitationStatus(str, Enum):
    """Invitation status, derived from timestamps and never stored"""

    pending = "pending"
    expired = "expired"
    accepted = "accepted"
    rejected = "rejected"
