from unittest.mock import AsyncMock, MagicMock

import pytest

from src.app.services.tenancy_config import TenancyConfig


def _async_repository(*methods):
    repository = MagicMock()
    for method in methods:
        setattr(repository, method, AsyncMock())
    return repository


async def _echo(entity):
    return entity


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = _async_repository("get_by_email", "get_by_id", "get_by_ids", "create")
    uow.tenants = _async_repository(
        "get_by_id",
        "get_by_id_for_update",
        "get_by_slug",
        "get_by_ids",
        "create",
        "update",
        "delete",
    )
    uow.memberships = _async_repository(
        "get_by_user_and_tenant",
        "get_by_user_id",
        "get_by_tenant_id",
        "count_by_role",
        "create",
        "update",
        "delete",
        "delete_by_tenant_id",
    )
    uow.invitations = _async_repository(
        "get_by_id",
        "get_pending_by_token",
        "get_pending_by_tenant_and_email",
        "get_pending_by_tenant_id",
        "get_expired_by_tenant_id",
        "get_pending_by_email",
        "create",
        "update",
        "delete",
        "delete_expired",
        "delete_by_tenant_id",
    )
    uow.audit_events = _async_repository("create", "get_by_tenant_id")

    # Writes hand back what they were given, like flush + refresh
    for repository in (uow.tenants, uow.memberships, uow.invitations, uow.audit_events):
        repository.create.side_effect = _echo
        repository.update.side_effect = _echo

    uow.users.get_by_email.return_value = None
    uow.invitations.get_pending_by_tenant_and_email.return_value = None
    uow.memberships.get_by_user_and_tenant.return_value = None

    return uow


@pytest.fixture
def tenancy_config():
    return TenancyConfig()


@pytest.fixture
def mock_notifier():
    notifier = MagicMock()
    notifier.send_invitation = AsyncMock()
    return notifier
