from uuid import uuid4

import pytest

from src.app.use_cases.members import UpdateMemberRoleUseCase
from src.domain.entities import Membership, Tenant, TenantRole
from src.domain.errors import TenantErrorCode


@pytest.fixture
def tenant():
    return Tenant(id=uuid4(), name="Acme", slug="acme")


def membership_for(tenant, role):
    return Membership(id=uuid4(), user_id=uuid4(), tenant_id=tenant.id, role=role)


@pytest.mark.asyncio
async def test_promote_member_to_admin(mock_uow, tenant):
    membership = membership_for(tenant, TenantRole.member)
    mock_uow.tenants.get_by_id_for_update.return_value = tenant
    mock_uow.memberships.get_by_user_and_tenant.return_value = membership
    actor_id = uuid4()

    result = await UpdateMemberRoleUseCase(mock_uow).execute(
        tenant.id, membership.user_id, "admin", actor_id
    )

    assert result.is_ok()
    assert membership.role == TenantRole.admin
    mock_uow.memberships.count_by_role.assert_not_called()

    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.action == "role_changed"
    assert audit.user_id == actor_id
    assert audit.event_metadata == {
        "target_user_id": str(membership.user_id),
        "old_role": "member",
        "new_role": "admin",
    }
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_demote_sole_owner_is_refused(mock_uow, tenant):
    """Scenario: sole owner O of T demoted to member"""
    owner = membership_for(tenant, TenantRole.owner)
    mock_uow.tenants.get_by_id_for_update.return_value = tenant
    mock_uow.memberships.get_by_user_and_tenant.return_value = owner
    mock_uow.memberships.count_by_role.return_value = 1

    result = await UpdateMemberRoleUseCase(mock_uow).execute(
        tenant.id, owner.user_id, TenantRole.member
    )

    assert result.is_err()
    assert result.error.code == TenantErrorCode.LAST_OWNER_PROTECTION
    assert result.error.message == "Cannot change role of the last owner of a tenant"
    assert owner.role == TenantRole.owner
    mock_uow.memberships.update.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_demote_one_of_two_owners(mock_uow, tenant):
    """Scenario: owners O1, O2; O1 demoted to admin"""
    owner = membership_for(tenant, TenantRole.owner)
    mock_uow.tenants.get_by_id_for_update.return_value = tenant
    mock_uow.memberships.get_by_user_and_tenant.return_value = owner
    mock_uow.memberships.count_by_role.return_value = 2

    result = await UpdateMemberRoleUseCase(mock_uow).execute(
        tenant.id, owner.user_id, "admin"
    )

    assert result.is_ok()
    assert owner.role == TenantRole.admin
    mock_uow.memberships.count_by_role.assert_called_once_with(tenant.id, TenantRole.owner)


@pytest.mark.asyncio
async def test_same_role_is_noop(mock_uow, tenant):
    owner = membership_for(tenant, TenantRole.owner)
    mock_uow.tenants.get_by_id_for_update.return_value = tenant
    mock_uow.memberships.get_by_user_and_tenant.return_value = owner

    result = await UpdateMemberRoleUseCase(mock_uow).execute(tenant.id, owner.user_id, "owner")

    assert result.is_ok()
    mock_uow.memberships.update.assert_not_called()
    mock_uow.audit_events.create.assert_not_called()


@pytest.mark.asyncio
async def test_invalid_role(mock_uow):
    result = await UpdateMemberRoleUseCase(mock_uow).execute(uuid4(), uuid4(), "superuser")

    assert result.is_err()
    assert result.error.code == TenantErrorCode.INVALID_ROLE
    mock_uow.tenants.get_by_id_for_update.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_tenant(mock_uow):
    mock_uow.tenants.get_by_id_for_update.return_value = None

    result = await UpdateMemberRoleUseCase(mock_uow).execute(uuid4(), uuid4(), "admin")

    assert result.is_err()
    assert result.error.code == TenantErrorCode.TENANT_NOT_FOUND


@pytest.mark.asyncio
async def test_non_member(mock_uow, tenant):
    mock_uow.tenants.get_by_id_for_update.return_value = tenant

    result = await UpdateMemberRoleUseCase(mock_uow).execute(tenant.id, uuid4(), "admin")

    assert result.is_err()
    assert result.error.code == TenantErrorCode.MEMBERSHIP_NOT_FOUND
