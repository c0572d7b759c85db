from typing import List

from pydantic import BaseModel, Field


class TenancyConfig(BaseModel):
    """
    Tenancy settings handed to the service and access gate at construction.

    Built once from ApplicationConfig; nothing in the application layer
    reads configuration globally.
    """

    invitation_expiry_days: int = Field(default=7, gt=0)
    super_admin_roles: List[str] = Field(default_factory=lambda: ["super_admin"])
    admin_panel_roles: List[str] = Field(
        default_factory=lambda: ["super_admin", "admin"]
    )
    allowed_email_domains: List[str] = Field(default_factory=lambda: ["example.com"])
    block_inactive_tenants: bool = True
    tenant_display_name: str = "Organization"

    @classmethod
    def from_application_config(cls, app_config) -> "TenancyConfig":
        return cls(
            invitation_expiry_days=app_config.INVITATION_EXPIRY_DAYS,
            super_admin_roles=list(app_config.SUPER_ADMIN_ROLES),
            admin_panel_roles=list(app_config.ADMIN_PANEL_ROLES),
            allowed_email_domains=list(app_config.ALLOWED_EMAIL_DOMAINS),
            block_inactive_tenants=app_config.BLOCK_INACTIVE_TENANTS,
            tenant_display_name=app_config.TENANT_DISPLAY_NAME,
        )
