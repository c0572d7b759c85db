from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.notification_dispatcher import LoggingNotificationDispatcher
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import verify_jwt
from src.app.services.access_gate import AccessGate, Identity
from src.app.services.notification_dispatcher import INotificationDispatcher
from src.app.services.tenancy_config import TenancyConfig
from src.app.services.tenant_invitation_service import TenantInvitationService
from src.app.services.tenant_locks import TenantLocks
from src.app.services.unit_of_work import UnitOfWork

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)

tenancy_config = TenancyConfig.from_application_config(ApplicationConfig)

# Shared by every request of this process
tenant_locks = TenantLocks()


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_tenancy_config() -> TenancyConfig:
    return tenancy_config


def get_notification_dispatcher() -> INotificationDispatcher:
    return LoggingNotificationDispatcher(tenancy_config.tenant_display_name)


def get_tenant_locks() -> TenantLocks:
    return tenant_locks


def get_access_gate(config: TenancyConfig = Depends(get_tenancy_config)) -> AccessGate:
    return AccessGate(config)


def get_tenant_invitation_service(
    uow: UnitOfWork = Depends(get_unit_of_work),
    config: TenancyConfig = Depends(get_tenancy_config),
    notifier: INotificationDispatcher = Depends(get_notification_dispatcher),
    locks: TenantLocks = Depends(get_tenant_locks),
) -> TenantInvitationService:
    return TenantInvitationService(uow, config, notifier, locks)


def _decode_user_id(token: str) -> UUID:
    payload = verify_jwt(token)

    if payload is None or "user_id" not in payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    try:
        return UUID(payload["user_id"])
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> UUID:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        The user_id carried by the token

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    return _decode_user_id(credentials.credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
) -> Optional[UUID]:
    """Same as get_current_user, but anonymous callers get None"""
    if credentials is None:
        return None
    return _decode_user_id(credentials.credentials)


async def get_current_identity(
    user_id: UUID = Depends(get_current_user),
    service: TenantInvitationService = Depends(get_tenant_invitation_service),
) -> Identity:
    """
    Resolve the bearer token into the caller's identity.

    Raises:
        HTTPException: 401 if the token names a user that no longer exists
    """
    result = await service.load_identity(user_id)
    if result.is_err():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user",
        )
    return result.value
