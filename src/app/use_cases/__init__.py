"""
Use Cases

Organized into domain folders:
- invitations/: Invitation lifecycle
- members/: Role changes, removals, membership queries
- tenants/: Tenant management
- users/: Caller identity
- audit/: Audit trail

Import from subdirectories.
"""
