"""
Tenant Management Use Cases

Creating, updating, deleting and listing tenants.
"""

from .create_tenant_use_case import CreateTenantUseCase
from .delete_tenant_use_case import DeleteTenantUseCase
from .dtos import TenantResponse, UserTenantResponse
from .list_user_tenants_use_case import ListUserTenantsUseCase
from .update_tenant_use_case import UpdateTenantUseCase

__all__ = [
    "CreateTenantUseCase",
    "UpdateTenantUseCase",
    "DeleteTenantUseCase",
    "ListUserTenantsUseCase",
    "TenantResponse",
    "UserTenantResponse",
]
