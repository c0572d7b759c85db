import pytest

from src.domain.entities import TenantRole
from src.domain.errors import InvalidRoleError, TenantErrorCode


@pytest.mark.parametrize("raw", ["owner", "admin", "member", "viewer"])
def test_parse_accepts_every_role(raw):
    assert TenantRole.parse(raw) == TenantRole(raw)


def test_parse_passes_enum_through():
    assert TenantRole.parse(TenantRole.admin) is TenantRole.admin


@pytest.mark.parametrize("raw", ["superuser", "OWNER", "", " member"])
def test_parse_rejects_unknown_role(raw):
    with pytest.raises(InvalidRoleError) as exc_info:
        TenantRole.parse(raw)

    error = exc_info.value.to_error()
    assert error.code == TenantErrorCode.INVALID_ROLE
    assert "Must be one of: owner, admin, member, viewer" in error.message


def test_privilege_order():
    assert TenantRole.owner.outranks(TenantRole.admin)
    assert TenantRole.admin.outranks(TenantRole.member)
    assert TenantRole.member.outranks(TenantRole.viewer)
    assert not TenantRole.viewer.outranks(TenantRole.viewer)


def test_owner_and_admin_manage_members_alike():
    assert TenantRole.owner.can_manage_members()
    assert TenantRole.admin.can_manage_members()
    assert not TenantRole.member.can_manage_members()
    assert not TenantRole.viewer.can_manage_members()

    assert TenantRole.admin.can_invite_members()
    assert not TenantRole.member.can_invite_members()


def test_only_owner_can_delete_tenant():
    assert TenantRole.owner.can_delete_tenant()
    assert not TenantRole.admin.can_delete_tenant()


def test_permissions_table():
    assert "tenant.delete" in TenantRole.owner.permissions()
    assert "tenant.members.remove" not in TenantRole.admin.permissions()
    assert TenantRole.viewer.permissions() == ["tenant.view"]


def test_labels_and_select_options():
    assert TenantRole.owner.label == "Owner"
    assert TenantRole.select_options() == {
        "owner": "Owner",
        "admin": "Admin",
        "member": "Member",
        "viewer": "Viewer",
    }
    assert TenantRole.viewer.description == "Read-only access to tenant resources"
