import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./tenant_iam.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")

    # Tenancy
    INVITATION_EXPIRY_DAYS = int(data.get("INVITATION_EXPIRY_DAYS", 7))
    SUPER_ADMIN_ROLES = data.get("SUPER_ADMIN_ROLES", ["super_admin"])
    ADMIN_PANEL_ROLES = data.get("ADMIN_PANEL_ROLES", ["super_admin", "admin"])
    ALLOWED_EMAIL_DOMAINS = data.get("ALLOWED_EMAIL_DOMAINS", ["example.com"])
    BLOCK_INACTIVE_TENANTS = bool(data.get("BLOCK_INACTIVE_TENANTS", True))
    TENANT_DISPLAY_NAME = data.get("TENANT_DISPLAY_NAME", "Organization")
