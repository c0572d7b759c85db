"""
Tenant domain error taxonomy.

Every expected failure of a tenancy operation is reported as
``Error(code, message)`` with one of these codes.
"""

from enum import Enum

from libs.result import Error


class TenantErrorCode(str, Enum):
    ALREADY_MEMBER = "ALREADY_MEMBER"
    INVITATION_NOT_FOUND = "INVITATION_NOT_FOUND"
    EMAIL_MISMATCH = "EMAIL_MISMATCH"
    LAST_OWNER_PROTECTION = "LAST_OWNER_PROTECTION"
    NOT_CANCELLABLE = "NOT_CANCELLABLE"
    INVALID_ROLE = "INVALID_ROLE"
    TENANT_INACTIVE = "TENANT_INACTIVE"
    TENANT_NOT_FOUND = "TENANT_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    MEMBERSHIP_NOT_FOUND = "MEMBERSHIP_NOT_FOUND"
    SLUG_ALREADY_EXISTS = "SLUG_ALREADY_EXISTS"
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"

    def __str__(self) -> str:
        return self.value


class InvalidRoleError(ValueError):
    """Raised when a raw string does not name a TenantRole"""

    def __init__(self, raw):
        self.raw = raw
        super().__init__(
            f"Invalid role: {raw}. Must be one of: owner, admin, member, viewer"
        )

    def to_error(self) -> Error:
        return Error(TenantErrorCode.INVALID_ROLE, str(self))


def already_member() -> Error:
    return Error(
        TenantErrorCode.ALREADY_MEMBER, "User is already a member of this tenant"
    )


def invitation_not_found() -> Error:
    return Error(
        TenantErrorCode.INVITATION_NOT_FOUND,
        "Invitation not found or no longer pending",
    )


def email_mismatch() -> Error:
    return Error(
        TenantErrorCode.EMAIL_MISMATCH,
        "This invitation is not for your email address",
    )


def last_owner_protection(action: str) -> Error:
    return Error(
        TenantErrorCode.LAST_OWNER_PROTECTION,
        f"Cannot {action} the last owner of a tenant",
    )


def not_cancellable() -> Error:
    return Error(
        TenantErrorCode.NOT_CANCELLABLE, "Can only cancel pending invitations"
    )


def tenant_inactive() -> Error:
    return Error(TenantErrorCode.TENANT_INACTIVE, "Tenant is not active")


def tenant_not_found() -> Error:
    return Error(TenantErrorCode.TENANT_NOT_FOUND, "Tenant not found")


def user_not_found() -> Error:
    return Error(TenantErrorCode.USER_NOT_FOUND, "User not found")


def membership_not_found() -> Error:
    return Error(
        TenantErrorCode.MEMBERSHIP_NOT_FOUND, "User is not a member of this tenant"
    )


def slug_already_exists(slug: str) -> Error:
    return Error(
        TenantErrorCode.SLUG_ALREADY_EXISTS, f"Slug '{slug}' is already taken"
    )


def user_already_exists(email: str) -> Error:
    return Error(
        TenantErrorCode.USER_ALREADY_EXISTS, f"A user with email {email} already exists"
    )
