from uuid import uuid4

import pytest

from src.app.use_cases.tenants import (
    CreateTenantUseCase,
    DeleteTenantUseCase,
    ListUserTenantsUseCase,
    UpdateTenantUseCase,
)
from src.domain.entities import Membership, Tenant, TenantRole, User
from src.domain.errors import TenantErrorCode


@pytest.mark.asyncio
async def test_create_tenant_with_owner(mock_uow):
    owner = User(id=uuid4(), email="owner@acme.com")
    mock_uow.tenants.get_by_slug.return_value = None
    mock_uow.users.get_by_id.return_value = owner

    result = await CreateTenantUseCase(mock_uow).execute("Acme Corp", owner_id=owner.id)

    assert result.is_ok()
    assert result.value.slug == "acme-corp"
    assert result.value.is_active is True

    membership = mock_uow.memberships.create.call_args.args[0]
    assert membership.user_id == owner.id
    assert membership.role == TenantRole.owner
    assert membership.tenant_id == result.value.id
    assert mock_uow.audit_events.create.call_args.args[0].action == "tenant_created"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_create_tenant_without_owner(mock_uow):
    mock_uow.tenants.get_by_slug.return_value = None

    result = await CreateTenantUseCase(mock_uow).execute("Acme", slug="Acme HQ")

    assert result.is_ok()
    assert result.value.slug == "acme-hq"
    mock_uow.memberships.create.assert_not_called()


@pytest.mark.asyncio
async def test_create_tenant_duplicate_slug(mock_uow):
    mock_uow.tenants.get_by_slug.return_value = Tenant(name="Other", slug="acme")

    result = await CreateTenantUseCase(mock_uow).execute("Acme")

    assert result.is_err()
    assert result.error.code == TenantErrorCode.SLUG_ALREADY_EXISTS
    mock_uow.tenants.create.assert_not_called()


@pytest.mark.asyncio
async def test_update_tenant_slug_conflict(mock_uow):
    tenant = Tenant(id=uuid4(), name="Acme", slug="acme")
    mock_uow.tenants.get_by_id.return_value = tenant
    mock_uow.tenants.get_by_slug.return_value = Tenant(id=uuid4(), name="Globex", slug="globex")

    result = await UpdateTenantUseCase(mock_uow).execute(tenant.id, slug="globex")

    assert result.is_err()
    assert result.error.code == TenantErrorCode.SLUG_ALREADY_EXISTS
    assert tenant.slug == "acme"


@pytest.mark.asyncio
async def test_update_tenant_deactivate(mock_uow):
    tenant = Tenant(id=uuid4(), name="Acme", slug="acme")
    mock_uow.tenants.get_by_id.return_value = tenant

    result = await UpdateTenantUseCase(mock_uow).execute(tenant.id, is_active=False)

    assert result.is_ok()
    assert result.value.is_active is False
    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.action == "tenant_updated"
    assert audit.event_metadata == {"changed": ["is_active"]}


@pytest.mark.asyncio
async def test_delete_tenant_cascades(mock_uow):
    tenant = Tenant(id=uuid4(), name="Acme", slug="acme")
    mock_uow.tenants.get_by_id_for_update.return_value = tenant
    mock_uow.invitations.delete_by_tenant_id.return_value = 2
    mock_uow.memberships.delete_by_tenant_id.return_value = 3

    result = await DeleteTenantUseCase(mock_uow).execute(tenant.id)

    assert result.is_ok()
    mock_uow.invitations.delete_by_tenant_id.assert_called_once_with(tenant.id)
    mock_uow.memberships.delete_by_tenant_id.assert_called_once_with(tenant.id)
    mock_uow.tenants.delete.assert_called_once_with(tenant)
    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.event_metadata["memberships_deleted"] == 3
    assert audit.event_metadata["invitations_deleted"] == 2


@pytest.mark.asyncio
async def test_delete_unknown_tenant(mock_uow):
    mock_uow.tenants.get_by_id_for_update.return_value = None

    result = await DeleteTenantUseCase(mock_uow).execute(uuid4())

    assert result.is_err()
    assert result.error.code == TenantErrorCode.TENANT_NOT_FOUND


@pytest.mark.asyncio
async def test_list_user_tenants(mock_uow):
    user_id = uuid4()
    acme = Tenant(id=uuid4(), name="Acme", slug="acme")
    globex = Tenant(id=uuid4(), name="Globex", slug="globex")
    mock_uow.memberships.get_by_user_id.return_value = [
        Membership(user_id=user_id, tenant_id=acme.id, role=TenantRole.owner),
        Membership(user_id=user_id, tenant_id=globex.id, role=TenantRole.viewer),
    ]
    mock_uow.tenants.get_by_ids.return_value = [acme, globex]

    result = await ListUserTenantsUseCase(mock_uow).execute(user_id)

    assert result.is_ok()
    assert [(t.tenant.slug, t.role) for t in result.value] == [
        ("acme", "owner"),
        ("globex", "viewer"),
    ]
