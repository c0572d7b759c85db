"""
Member Management Use Cases

Role changes, removals and read-only membership queries.
"""

from .dtos import MemberResponse, RoleCapabilities
from .membership_queries import MembershipQueries
from .remove_member_use_case import RemoveMemberUseCase
from .update_member_role_use_case import UpdateMemberRoleUseCase

__all__ = [
    "UpdateMemberRoleUseCase",
    "RemoveMemberUseCase",
    "MembershipQueries",
    "MemberResponse",
    "RoleCapabilities",
]
