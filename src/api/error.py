from fastapi import status
from libs.result import Error
from src.domain.errors import TenantErrorCode


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


DOMAIN_ERROR_STATUS = {
    TenantErrorCode.INVALID_ROLE: status.HTTP_400_BAD_REQUEST,
    "INVALID_STATUS": status.HTTP_400_BAD_REQUEST,
    TenantErrorCode.EMAIL_MISMATCH: status.HTTP_403_FORBIDDEN,
    TenantErrorCode.TENANT_INACTIVE: status.HTTP_403_FORBIDDEN,
    TenantErrorCode.TENANT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    TenantErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    TenantErrorCode.MEMBERSHIP_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    TenantErrorCode.INVITATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    TenantErrorCode.ALREADY_MEMBER: status.HTTP_409_CONFLICT,
    TenantErrorCode.LAST_OWNER_PROTECTION: status.HTTP_409_CONFLICT,
    TenantErrorCode.NOT_CANCELLABLE: status.HTTP_409_CONFLICT,
    TenantErrorCode.SLUG_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    TenantErrorCode.USER_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
}


def raise_for_error(error: Error):
    """Raise the ClientError matching a domain error, or ServerError if unmapped"""
    status_code = DOMAIN_ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)


def forbidden(message: str = "Insufficient permissions", code: str = "INSUFFICIENT_ROLE"):
    return ClientError(Error(code, message), status_code=status.HTTP_403_FORBIDDEN)
